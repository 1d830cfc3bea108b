"""Allow ``python -m semver_notes``."""

from semver_notes.cli import main

if __name__ == "__main__":
    main()
