"""
Constants shared by the archive model and the diff engine.
"""

# Extensions of parts that are read and written as text. Everything else is binary.
TEXT_EXTENSIONS = ('.xml', '.rels', '.vml', '.txt')

# Parts that are displayed as images by presentation layers.
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif')

# Parts whose deletion usually corrupts the document.
CRITICAL_PARTS = (
    '[Content_Types].xml',
    'document.xml',
    'workbook.xml',
    'presentation.xml',
    'content.xml',
    'styles.xml',
    'settings.xml',
    'app.xml',
    'core.xml',
)

# ODF packages require this entry to be the first one and to be stored uncompressed.
ODF_MIMETYPE_ENTRY = 'mimetype'

RELATIONSHIPS_DIR = '_rels'
RELATIONSHIPS_SUFFIX = '.rels'
