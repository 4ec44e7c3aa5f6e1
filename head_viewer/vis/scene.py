"""
Minimal retained-mode scene graph.

Nodes carry a local position, rotation, scale and material color, and are
parented into a tree. Matrices follow the row-vector convention used by
pyrr and the renderer (``v_world = v_local @ M``).
"""

import numpy as np
import pyrr


def euler_matrix(x, y, z):
    """
    Rotation matrix for Euler angles in degrees.

    Rotations are applied about Z, then X, then Y.
    """
    rx = pyrr.matrix33.create_from_x_rotation(np.radians(x))
    ry = pyrr.matrix33.create_from_y_rotation(np.radians(y))
    rz = pyrr.matrix33.create_from_z_rotation(np.radians(z))
    return rz @ rx @ ry


class SceneNode:
    """A transform with an optional sphere primitive attached."""

    def __init__(self, name, position=(0.0, 0.0, 0.0), parent=None, primitive=None):
        self.name = name
        self.primitive = primitive  # None for pure transforms, "sphere" for spheres
        self.position = np.array(position, dtype=np.float64)
        self.rotation = np.eye(3)
        self.scale = np.ones(3)
        self.color = (255, 255, 255, 255)
        self.parent = None
        self.children = []
        if parent is not None:
            parent.add_child(self)

    def add_child(self, node):
        if node.parent is not None:
            node.parent.children.remove(node)
        node.parent = self
        self.children.append(node)

    def set_rotation(self, x, y, z):
        """Set the local orientation from Euler angles in degrees."""
        self.rotation = euler_matrix(x, y, z)

    def rotate(self, x, y, z):
        """Rotate by Euler angles in degrees about the node's own axes."""
        self.rotation = euler_matrix(x, y, z) @ self.rotation

    def set_local_scale(self, scale):
        """Set a uniform scale factor or an (sx, sy, sz) triple."""
        self.scale = np.broadcast_to(np.asarray(scale, dtype=np.float64), (3,)).copy()

    def set_color(self, rgba):
        """Set the material color as 0-255 (r, g, b, a)."""
        self.color = tuple(int(c) for c in rgba)

    def local_matrix(self):
        scale = pyrr.matrix44.create_from_scale(self.scale)
        rotation = pyrr.matrix44.create_from_matrix33(self.rotation)
        translation = pyrr.matrix44.create_from_translation(self.position)
        return scale @ rotation @ translation

    def world_matrix(self):
        matrix = self.local_matrix()
        if self.parent is not None:
            matrix = matrix @ self.parent.world_matrix()
        return matrix

    def walk(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class Scene:
    """
    Owns the scene graph root and creates primitives under it.

    Renderers read the sphere nodes back through ``spheres()``.
    """

    def __init__(self):
        self.root = SceneNode("Scene")

    def create_node(self, name, parent=None):
        return SceneNode(name, parent=parent or self.root)

    def create_sphere(self, position, parent=None, name="Ball"):
        """Create a sphere primitive at ``position`` under ``parent``."""
        return SceneNode(name, position=position, parent=parent or self.root, primitive="sphere")

    def spheres(self):
        return [node for node in self.root.walk() if node.primitive == "sphere"]

    def sphere_instances(self):
        """
        Pack every sphere's world transform and color for instanced drawing.

        Returns:
            tuple: (matrices, colors). Matrices are float32 with shape (n, 4, 4),
            colors are float32 RGBA in [0, 1] with shape (n, 4).
        """
        matrices = []
        colors = []
        # Parent matrices are computed once per subtree, not once per sphere
        stack = [(self.root, np.eye(4))]
        while stack:
            node, parent_matrix = stack.pop()
            matrix = node.local_matrix() @ parent_matrix
            if node.primitive == "sphere":
                matrices.append(matrix)
                colors.append(node.color)
            stack.extend((child, matrix) for child in reversed(node.children))

        if not matrices:
            return np.zeros((0, 4, 4), dtype=np.float32), np.zeros((0, 4), dtype=np.float32)
        return (
            np.array(matrices, dtype=np.float32),
            np.array(colors, dtype=np.float32) / 255.0,
        )
