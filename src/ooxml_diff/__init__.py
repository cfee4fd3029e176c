"""
Browse, edit and diff the parts of OOXML/ODF zip packages.
"""

from .__version__ import (
    __author__,
    __author_email__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
)

from .errors import (
    OoxmlDiffError,
    LoadError,
    NotFoundError,
    ComparisonReadError,
    FormatError,
)

from .diff_data import (
    DiffStatus,
    ContentKind,
    TreeNode,
    MergedTreeNode,
    walk,
    find_node,
    diff_stats,
)

from .archive_format_handler import (
    ArchiveEntry,
    ArchiveFormatHandler,
    ZipArchiveHandler,
)

from .archive_store import ArchiveStore

from .tree_builder import (
    build_tree,
    sort_nodes,
)

from .canonicalize import (
    normalize_attributes,
    canonicalize_xml,
    xml_equal,
    format_for_display,
)

from .file_comparison import (
    BinaryComparison,
    ContentComparer,
    FileHasher,
)

from .tree_merge import merge_trees

from .diff_status import compute_diff_statuses

from .relationships import (
    RelationshipMap,
    relationships_path_for,
    resolve_target,
    parse_relationships,
    load_relationship_map,
)

from .archive_diff import (
    ArchiveDiffer,
    DeleteSummary,
    PartPair,
    is_critical_part,
)

from .cli_output import (
    print_diff,
    visible_rows,
    DiffPrinter,
)

from .log import setup_logging
