"""
winfon test suite
"""

import unittest

from tests.test_container import *
from tests.test_fnt import *
from tests.test_fon import *


if __name__ == '__main__':
    unittest.main()
