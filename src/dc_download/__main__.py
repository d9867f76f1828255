"""Main entry point for running dc_download as a module.

Usage:
    python -m dc_download <uuid-of-item>
    python -m dc_download --help
"""

from dc_download.cli import main

if __name__ == '__main__':
    main()
