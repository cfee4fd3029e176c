"""
Package metadata.
"""

__title__ = 'ooxml-diff'
__description__ = 'Browse, edit and diff the parts of OOXML/ODF zip packages.'
__url__ = 'https://github.com/JBamberger/ooxml-diff'
__version__ = '0.1.0'
__author__ = 'Jannik Bamberger'
__author_email__ = 'jannik.bamberger@gmail.com'
__license__ = 'MIT'
__copyright__ = 'Copyright 2024 Jannik Bamberger'
