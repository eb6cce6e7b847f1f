# SPDX-License-Identifier: MIT

__version__ = "0.4.0"


def main() -> None:
    from timecard.cleanup import register_cleanup
    from timecard.initialize import initialize
    from timecard.terminal.app import run

    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
