"""Pytest configuration for shared test markers."""


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: drives the runner or CLI against an in-memory snapshot host.",
    )
