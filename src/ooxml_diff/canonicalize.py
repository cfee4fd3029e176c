"""
Normalization of XML text so that parts can be compared independently of attribute order and
formatting whitespace.
"""

from __future__ import annotations

import re
from xml.parsers.expat import ExpatError

from defusedxml import DefusedXmlException
from defusedxml import minidom
from loguru import logger

from ooxml_diff.errors import FormatError

# Start tag with at least one whitespace separated chunk of attributes.
_START_TAG = re.compile(r'<([a-zA-Z_:][\w:.-]*)\s+([^>]+?)(/?)\s*>')
_ATTRIBUTE = re.compile(r'''[\w:.-]+\s*=\s*("[^"]*"|'[^']*')''')
_ASSIGNMENT = re.compile(r'\s*=\s*')
_DECLARATION = re.compile(r'<\?xml\s[^>]*\?>\s*', re.IGNORECASE)
_INTER_TAG_SPACE = re.compile(r'>\s+<')
_BLANK_LINE = re.compile(r'^\s*$')


def _sort_tag_attributes(match: re.Match) -> str:
    tag_name, attributes, self_close = match.groups()
    pairs = [pair.group(0) for pair in _ATTRIBUTE.finditer(attributes)]
    if len(pairs) <= 1:
        return match.group(0)

    normalized = sorted(_ASSIGNMENT.sub('=', pair, count=1) for pair in pairs)
    return f'<{tag_name} {" ".join(normalized)}{self_close}>'


def normalize_attributes(xml: str) -> str:
    """
    Sorts the attributes of every start tag lexicographically by their `name=value` string and
    removes the whitespace around `=`. Tags with less than two attributes are left untouched.

    :param xml: XML text.
    :return: XML text with sorted attributes.
    """
    return _START_TAG.sub(_sort_tag_attributes, xml)


def canonicalize_xml(xml: str) -> str:
    """
    Canonical form used for equality checks: sorted attributes, no XML declaration, no whitespace
    between tags and no leading or trailing whitespace. Canonicalizing a canonical text returns it
    unchanged.

    :param xml: XML text.
    :return: Canonical text.
    """
    text = normalize_attributes(xml)
    text = _DECLARATION.sub('', text, count=1)
    text = _INTER_TAG_SPACE.sub('><', text)
    return text.strip()


def xml_equal(left: str, right: str) -> bool:
    """
    :return: True if both texts have the same canonical form.
    """
    return canonicalize_xml(left) == canonicalize_xml(right)


def pretty_print_xml(xml: str, indent: str = '  ') -> str:
    """
    Indents the XML document. Elements with only text content stay on one line and an existing XML
    declaration is kept as is.

    :param xml: XML text.
    :param indent: Indentation per nesting level.
    :raises FormatError: If the text is not well-formed XML.
    :return: Indented XML text.
    """
    try:
        document = minidom.parseString(xml)
    except (ExpatError, DefusedXmlException, ValueError) as error:
        raise FormatError(str(error)) from error

    # Comments and processing instructions around the root element are document children too.
    lines = []
    for node in document.childNodes:
        body = node.toprettyxml(indent=indent, newl='\n')
        lines.extend(line for line in body.split('\n') if not _BLANK_LINE.match(line))

    declaration = _DECLARATION.match(xml.lstrip())
    if declaration is not None:
        lines.insert(0, declaration.group(0).strip())
    return '\n'.join(lines)


def format_for_display(text: str) -> str:
    """
    Prepares XML text for display: attributes are sorted the same way as for comparison and the
    document is pretty-printed. Line endings are normalized and tabs replaced by two spaces. If the
    text is not well-formed, it is returned unchanged.

    :param text: XML text.
    :return: Formatted text.
    """
    try:
        formatted = pretty_print_xml(text)
    except FormatError as error:
        logger.debug('Could not format XML, showing it unformatted: {}', error)
        return text

    # The parser emits namespace declarations before all other attributes, so sort afterwards.
    formatted = normalize_attributes(formatted)
    return formatted.replace('\r\n', '\n').replace('\r', '\n').replace('\t', '  ')
