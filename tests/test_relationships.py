"""
Test cases for relationship descriptor parsing and target resolution.
"""
import unittest
from unittest import TestCase

from ooxml_diff.archive_store import ArchiveStore
from ooxml_diff.relationships import load_relationship_map, parse_relationships, \
    relationships_path_for, resolve_target

from zip_helpers import make_archive

DOCUMENT_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/styles" Target="styles.xml"/>'
    '<Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/image" Target="media/image1.png"/>'
    '<Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/customXml" Target="../customXml/item1.xml"/>'
    '<Relationship Id="rId4" Type="http://schemas.openxmlformats.org/officeDocument/2006/'
    'relationships/hyperlink" Target="https://example.com/page" TargetMode="External"/>'
    '</Relationships>'
)


class TestRelationshipsPath(TestCase):
    """
    Tests the location of companion descriptors.
    """

    def test_nested_part(self):
        self.assertEqual('word/_rels/document.xml.rels', relationships_path_for('word/document.xml'))

    def test_root_part(self):
        self.assertEqual('_rels/.rels', relationships_path_for(''))
        self.assertEqual('_rels/content.xml.rels', relationships_path_for('content.xml'))

    def test_deep_part(self):
        self.assertEqual('ppt/slides/_rels/slide1.xml.rels',
                         relationships_path_for('ppt/slides/slide1.xml'))


class TestResolveTarget(TestCase):
    """
    Tests the resolution of targets against the part directory.
    """

    def test_relative(self):
        self.assertEqual('word/media/image1.png', resolve_target('media/image1.png', 'word'))

    def test_parent_directory(self):
        self.assertEqual('customXml/item1.xml', resolve_target('../customXml/item1.xml', 'word'))
        self.assertEqual('ppt/slideLayouts/slideLayout1.xml',
                         resolve_target('../slideLayouts/slideLayout1.xml', 'ppt/slides'))

    def test_current_directory(self):
        self.assertEqual('word/styles.xml', resolve_target('./styles.xml', 'word'))

    def test_root_level_part(self):
        self.assertEqual('word/document.xml', resolve_target('word/document.xml', None))
        self.assertEqual('word/document.xml', resolve_target('word/document.xml', ''))

    def test_absolute(self):
        self.assertEqual('word/document.xml', resolve_target('/word/document.xml', 'ppt'))

    def test_external(self):
        for target in ('https://example.com/a/../b', 'mailto:someone@example.com',
                       'file:///C:/docs/other.docx'):
            self.assertEqual(target, resolve_target(target, 'word'))


class TestParseRelationships(TestCase):
    """
    Tests descriptor parsing.
    """

    def test_parse(self):
        self.assertEqual({
            'rId1': 'word/styles.xml',
            'rId2': 'word/media/image1.png',
            'rId3': 'customXml/item1.xml',
            'rId4': 'https://example.com/page',
        }, parse_relationships(DOCUMENT_RELS, 'word'))

    def test_external_mode_is_not_resolved(self):
        text = ('<Relationships><Relationship Id="rId9" Target="../linked.xlsx" '
                'TargetMode="External"/></Relationships>')
        self.assertEqual({'rId9': '../linked.xlsx'}, parse_relationships(text, 'word'))

    def test_incomplete_relationships_are_skipped(self):
        text = '<Relationships><Relationship Id="rId1"/><Relationship Target="a.xml"/></Relationships>'
        self.assertEqual({}, parse_relationships(text, 'word'))


class TestLoadRelationshipMap(TestCase):
    """
    Tests loading descriptors from an archive.
    """

    def test_load(self):
        store = ArchiveStore.from_bytes(make_archive({
            'word/document.xml': '<w:document/>',
            'word/_rels/document.xml.rels': DOCUMENT_RELS,
        }))
        relationships = load_relationship_map(store, 'word/document.xml')
        self.assertEqual('word/media/image1.png', relationships['rId2'])

    def test_missing_descriptor(self):
        store = ArchiveStore.from_bytes(make_archive({'word/document.xml': '<w:document/>'}))
        self.assertEqual({}, load_relationship_map(store, 'word/document.xml'))

    def test_malformed_descriptor(self):
        store = ArchiveStore.from_bytes(make_archive({
            'word/document.xml': '<w:document/>',
            'word/_rels/document.xml.rels': '<Relationships><Relationship',
        }))
        self.assertEqual({}, load_relationship_map(store, 'word/document.xml'))


if __name__ == '__main__':
    unittest.main()
