# Licensed under the MIT License
# https://github.com/craigahobbs/claudesh/blob/main/LICENSE

"""
claudesh top-level script environment
"""

from .main import main


if __name__ == '__main__': # pragma: no cover
    main()
