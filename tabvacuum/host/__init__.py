"""Host wiring: commands, plan execution and persistence around the planners."""
