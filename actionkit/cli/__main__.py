"""Allow ``python -m actionkit.cli``."""

from actionkit.cli.main import main

if __name__ == "__main__":
    main()
