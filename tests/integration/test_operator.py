"""
Integration tests for the Component to Group operator.

Builds collection instances in a real scene, runs
``bpy.ops.object.component_to_group()`` and checks the resulting groups.
"""

import unittest

from test_base import ComponentToGroupTestCase, bpy

if bpy is not None:
    import mathutils

from object_component_to_group.constants import CONTRIBUTORS_INFO_DICTIONARY


class TestOperatorRegistration(ComponentToGroupTestCase):

    def test_operator_registered(self):
        self.assertTrue(hasattr(bpy.ops.object, "component_to_group"))

    def test_behavior_property_registered(self):
        collection = bpy.data.collections.new("Probe")
        self.assertFalse(collection.component_behavior.is_group)
        self.assertEqual(collection.component_behavior.snapto, "NONE")

    def test_register_twice_is_noop(self):
        import object_component_to_group
        object_component_to_group.register()
        self.assertTrue(hasattr(bpy.ops.object, "component_to_group"))


class TestOperatorPoll(ComponentToGroupTestCase):

    def test_poll_false_without_components(self):
        mesh = bpy.data.meshes.new("Plain")
        obj = bpy.data.objects.new("Plain", mesh)
        bpy.context.scene.collection.objects.link(obj)
        obj.select_set(True)
        self.assertFalse(bpy.ops.object.component_to_group.poll())

    def test_poll_true_with_component(self):
        self.create_instance(self.create_definition())
        self.assertTrue(bpy.ops.object.component_to_group.poll())


class TestOperatorConversion(ComponentToGroupTestCase):

    def test_single_instance(self):
        chair = self.create_definition()
        self.create_instance(chair, location=(2.0, 3.0, 0.0))

        result = bpy.ops.object.component_to_group()

        self.assertIn("FINISHED", result)
        groups = self.component_objects()
        self.assertEqual(len(groups), 1)
        group = groups[0]
        self.assertTrue(group.instance_collection.component_behavior.is_group)
        self.assertNotEqual(group.instance_collection, chair)
        self.assertEqual(group.matrix_world.translation, mathutils.Vector((2.0, 3.0, 0.0)))
        # Geometry is a copy, not a link.
        copied = list(group.instance_collection.objects)
        self.assertEqual(len(copied), 1)
        self.assertNotEqual(copied[0].data, list(chair.objects)[0].data)

    def test_two_instances_share_group_definition(self):
        chair = self.create_definition()
        self.create_instance(chair, location=(0.0, 0.0, 0.0))
        self.create_instance(chair, location=(5.0, 0.0, 0.0))

        bpy.ops.object.component_to_group()

        groups = self.component_objects()
        self.assertEqual(len(groups), 2)
        self.assertEqual(groups[0].instance_collection, groups[1].instance_collection)
        translations = sorted(tuple(g.matrix_world.translation) for g in groups)
        self.assertEqual(translations, [(0.0, 0.0, 0.0), (5.0, 0.0, 0.0)])

    def test_properties_copied(self):
        chair = self.create_definition()
        chair.component_behavior.is2d = True
        chair.component_behavior.snapto = "VERTICAL"
        chair["Catalog"] = {"sku": "CH-1"}
        chair[CONTRIBUTORS_INFO_DICTIONARY] = {"author": "someone"}
        empty = self.create_instance(chair)
        empty.color = (1.0, 0.0, 0.0, 1.0)
        empty["Dynamic"] = {"width": 40, "Nested": {"depth": 2}}
        empty[CONTRIBUTORS_INFO_DICTIONARY] = {"author": "someone"}

        bpy.ops.object.component_to_group()

        group = self.component_objects()[0]
        self.assertEqual(tuple(group.color), (1.0, 0.0, 0.0, 1.0))
        self.assertEqual(group["Dynamic"].to_dict(), {"width": 40, "Nested": {"depth": 2}})
        self.assertNotIn(CONTRIBUTORS_INFO_DICTIONARY, group.keys())
        definition = group.instance_collection
        self.assertTrue(definition.component_behavior.is2d)
        self.assertEqual(definition.component_behavior.snapto, "VERTICAL")
        self.assertEqual(definition["Catalog"].to_dict(), {"sku": "CH-1"})
        self.assertNotIn(CONTRIBUTORS_INFO_DICTIONARY, definition.keys())

    def test_unselected_instances_untouched(self):
        chair = self.create_definition()
        self.create_instance(chair)
        kept = self.create_instance(chair, location=(4.0, 0.0, 0.0), select=False)

        bpy.ops.object.component_to_group()

        self.assertEqual(kept.instance_collection, chair)

    def test_groups_selected_after_conversion(self):
        self.create_instance(self.create_definition())
        bpy.ops.object.component_to_group()
        self.assertEqual(bpy.context.selected_objects, self.component_objects())


if __name__ == "__main__":
    unittest.main()
