import sys

import dotenv

from vanitygrind.cli.runner import main


def run() -> None:
    dotenv.load_dotenv()
    sys.exit(main())


if __name__ == '__main__':
    run()
