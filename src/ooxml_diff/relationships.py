"""
Parsing of part relationship descriptors (`_rels/*.rels`) and resolution of their targets to
archive paths.
"""

from __future__ import annotations

import re
from typing import Dict, Optional
from xml.etree.ElementTree import ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree
from loguru import logger

from ooxml_diff.archive_store import ArchiveStore
from ooxml_diff.constants import RELATIONSHIPS_DIR, RELATIONSHIPS_SUFFIX
from ooxml_diff.errors import NotFoundError
from ooxml_diff.utils import parent_path, path_parts

RelationshipMap = Dict[str, str]

# Scheme of an absolute URI, e.g. `http:` or `mailto:`.
_URI_SCHEME = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*:')


def relationships_path_for(part_path: str) -> str:
    """
    :param part_path: Archive path of a part, e.g. `word/document.xml`.
    :return: Path of the companion descriptor, e.g. `word/_rels/document.xml.rels`.
    """
    part_path = part_path.strip('/')
    folder = parent_path(part_path)
    file_name = part_path.rsplit('/', 1)[-1]
    rels_folder = f'{folder}/{RELATIONSHIPS_DIR}' if folder else RELATIONSHIPS_DIR
    return f'{rels_folder}/{file_name}{RELATIONSHIPS_SUFFIX}'


def is_external_target(target: str) -> bool:
    return bool(_URI_SCHEME.match(target))


def resolve_target(target: str, base_dir: Optional[str]) -> str:
    """
    Resolves a relationship target to an archive-root-relative path.

    :param target: Value of the `Target` attribute.
    :param base_dir: Directory of the source part, None or empty for root-level parts.
    :return: External URIs unchanged, otherwise the normalized archive path.
    """
    if is_external_target(target):
        return target
    if target.startswith('/'):
        return target[1:]

    segments = path_parts(base_dir) if base_dir else []
    for part in target.split('/'):
        if part == '..':
            if segments:
                segments.pop()
        elif part != '.':
            segments.append(part)
    return '/'.join(segments)


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def parse_relationships(text: str, base_dir: Optional[str]) -> RelationshipMap:
    """
    Extracts the relationships of a descriptor.

    :param text: XML text of the descriptor.
    :param base_dir: Directory of the source part the descriptor belongs to.
    :raises ParseError: If the text is not well-formed XML.
    :return: Mapping from relationship id to resolved target.
    """
    root = ElementTree.fromstring(text)

    relationships = {}
    for element in root.iter():
        if not isinstance(element.tag, str) or _local_name(element.tag) != 'Relationship':
            continue
        rel_id = element.get('Id')
        target = element.get('Target')
        if not rel_id or not target:
            continue
        if element.get('TargetMode') == 'External':
            relationships[rel_id] = target
        else:
            relationships[rel_id] = resolve_target(target, base_dir)
    return relationships


def load_relationship_map(store: ArchiveStore, part_path: str) -> RelationshipMap:
    """
    Loads the relationships of a part. A missing or malformed descriptor yields an empty mapping.

    :param store: Archive containing the part.
    :param part_path: Archive path of the part.
    :return: Mapping from relationship id to resolved target.
    """
    rels_path = relationships_path_for(part_path)
    try:
        text = store.read_entry(rels_path)
    except NotFoundError:
        logger.debug('No relationship descriptor for {}', part_path)
        return {}

    try:
        relationships = parse_relationships(text, parent_path(part_path.strip('/')))
    except (ParseError, DefusedXmlException) as error:
        logger.warning('Could not parse relationship descriptor {}: {}', rels_path, error)
        return {}

    logger.debug('Loaded {} relationships from {}', len(relationships), rels_path)
    return relationships
