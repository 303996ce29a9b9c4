# This file makes the 'commands' directory a Python package
# Importing command modules from here

from . import init
from . import add
from . import commit
from . import reset
