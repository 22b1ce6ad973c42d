"""podspect Core: domain, contracts and services with no I/O dependencies."""
