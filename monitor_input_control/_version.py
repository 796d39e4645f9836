__version__ = '0.3.0'
__author__ = 'SimmyDizzle'
