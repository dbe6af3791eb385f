"""
Integration tests for ``object_component_to_group.blender_host.model``.

Checks the operation journal of the Blender bridge: aborting removes
everything created, committing removes erased objects.
"""

import unittest

from test_base import ComponentToGroupTestCase, bpy

from object_component_to_group.api import component_to_group
from object_component_to_group.convert import selected_components


class TestBlenderModel(ComponentToGroupTestCase):

    def model(self):
        from object_component_to_group.blender_host.model import BlenderModel
        return BlenderModel(bpy.context)

    def test_selected_components_skips_groups(self):
        chair = self.create_definition()
        empty = self.create_instance(chair)
        model = self.model()
        group = model.wrap(empty).parent.entities.add_group()
        group.obj.select_set(True)

        found = selected_components(model)

        self.assertEqual([c.obj for c in found], [empty])

    def test_abort_removes_created_objects(self):
        chair = self.create_definition()
        self.create_instance(chair)
        objects_before = set(bpy.data.objects)
        collections_before = set(bpy.data.collections)
        model = self.model()

        model.start_operation("Component to Group")
        from object_component_to_group.convert import convert_to_groups
        convert_to_groups(selected_components(model))
        model.abort_operation()

        self.assertEqual(set(bpy.data.objects), objects_before)
        self.assertEqual(set(bpy.data.collections), collections_before)

    def test_explode_skips_objects_erased_in_operation(self):
        chair = self.create_definition()
        room = self.create_definition("Room")
        inside = self.create_instance(chair, select=False)
        bpy.context.scene.collection.objects.unlink(inside)
        room.objects.link(inside)
        placed_room = self.create_instance(room, select=False)
        model = self.model()

        model.start_operation("Component to Group")
        from object_component_to_group.convert import convert_to_groups
        group_chair, group_room = convert_to_groups([model.wrap(inside), model.wrap(placed_room)])
        model.commit_operation()

        nested = [obj for obj in group_room.obj.instance_collection.objects if obj.instance_type == "COLLECTION"]
        self.assertEqual(len(nested), 1)
        self.assertEqual(nested[0].instance_collection, group_chair.obj.instance_collection)
        self.assertTrue(nested[0].instance_collection.component_behavior.is_group)

    def test_commit_removes_erased_instances(self):
        chair = self.create_definition()
        empty = self.create_instance(chair)
        name = empty.name

        component_to_group(self.model())

        self.assertIsNone(bpy.data.objects.get(name))
        self.assertFalse(self.model().operation_active)


if __name__ == "__main__":
    unittest.main()
