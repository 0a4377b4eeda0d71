"""Module entrypoint for `python -m registry_verifier`.

Delegates to the verifier CLI implementation.
"""

import sys

from .run_verify import main


if __name__ == "__main__":
    sys.exit(main())
