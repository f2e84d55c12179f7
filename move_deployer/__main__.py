"""Allow running as ``python -m move_deployer``"""

from .cli.main import main

if __name__ == "__main__":
    main()
