"""actionkit command line interface."""
