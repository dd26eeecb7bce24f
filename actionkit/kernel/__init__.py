"""actionkit kernel: domain models, ports, configuration and orchestration."""
