"""
Unit tests for ``object_component_to_group.transaction``.

Pure Python. No bpy required.
"""

import unittest

from object_component_to_group.common.types import IDENTITY
from object_component_to_group.document import Document
from object_component_to_group.transaction import operation


class _RecordingModel:
    """Host model stub recording operation calls."""

    def __init__(self):
        self.calls = []

    def start_operation(self, name):
        self.calls.append(("start", name))

    def commit_operation(self):
        self.calls.append(("commit",))

    def abort_operation(self):
        self.calls.append(("abort",))


class TestOperation(unittest.TestCase):

    def test_commits_on_success(self):
        model = _RecordingModel()
        with operation(model, "Component to Group") as active:
            self.assertIs(active, model)
        self.assertEqual(model.calls, [("start", "Component to Group"), ("commit",)])

    def test_aborts_and_reraises_on_failure(self):
        model = _RecordingModel()
        with self.assertRaises(KeyError):
            with operation(model, "Component to Group"):
                raise KeyError("boom")
        self.assertEqual(model.calls, [("start", "Component to Group"), ("abort",)])

    def test_document_rolled_back_on_failure(self):
        doc = Document()
        chair = doc.definitions.add("Chair")
        instance = doc.entities.add_instance(chair, IDENTITY)

        with self.assertRaises(ValueError):
            with operation(doc, "Break"):
                instance.erase()
                doc.entities.add_group()
                raise ValueError("halfway")

        self.assertFalse(doc.operation_active)
        self.assertEqual(doc.undo_stack, [])
        self.assertEqual(len(doc.entities), 1)
        self.assertEqual(doc.entity(instance.entity_id).definition.name, "Chair")

    def test_document_operation_recorded(self):
        doc = Document()
        with operation(doc, "Add group"):
            doc.entities.add_group()
        self.assertEqual(doc.undo_stack, ["Add group"])


if __name__ == "__main__":
    unittest.main()
