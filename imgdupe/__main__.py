"""
Allow running the package with: python -m imgdupe

Examples:
    python -m imgdupe /path/to/photos        # Scan and list similar pairs
    python -m imgdupe /path/to/photos -R     # Include subdirectories
    python -m imgdupe config                 # Show effective settings
    python -m imgdupe config --init          # Write an example config file
"""

import sys


def show_config(argv: list) -> int:
    """Handle the 'config' subcommand."""
    from .scanner import has_heif_support
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in argv or '-i' in argv:
        if not config.create_example_config():
            print("Failed to create configuration file.", file=sys.stderr)
            return 1
        print(f"Created example configuration file at:\n  {config.config_file_path}")
        return 0

    status = "found" if config.config_file_path.exists() else "not found, using defaults"
    print(f"Configuration file: {config.config_file_path} ({status})")
    print()
    for setting in config.describe():
        value = setting.value if setting.value is not None else '(inside scanned directory)'
        print(f"  {setting.key:<18} {value}  [{setting.source}]")

    heif = "enabled" if has_heif_support() else "not installed (pip install pillow-heif)"
    print(f"\nHEIC/HEIF support: {heif}")
    return 0


def main() -> int:
    args = sys.argv[1:]
    if args and args[0] == 'config':
        return show_config(args[1:])

    from .cli import main as cli_main
    return cli_main(args)


if __name__ == '__main__':
    sys.exit(main())
