"""Allow running PortSniff with python -m portsniff"""

from .cli import main

if __name__ == '__main__':
    main(prog_name='portsniff')
