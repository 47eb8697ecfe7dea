"""Run the tool server on stdin/stdout: ``python -m toolhost``."""

from toolhost.ext.server import main

if __name__ == "__main__":
    main()
