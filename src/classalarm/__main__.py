"""Entry point for 'python -m classalarm'."""

from classalarm.cli import main

if __name__ == "__main__":
    main()
