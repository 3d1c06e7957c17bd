"""Intent flow analysis tool - Entry point."""

from intent_flow.cli import main

if __name__ == "__main__":
    main()
