"""
Instanced sphere renderer on WebGPU.

Draws every sphere node of a ``Scene`` with a single instanced draw call.
Each instance carries its world matrix and RGBA color; both are re-uploaded
every frame from the scene graph.
"""

import logging

import numpy as np
import pyrr
import wgpu

logger = logging.getLogger(__name__)

SHADER_SOURCE = """
struct Uniforms {
    view_proj: mat4x4<f32>,
    light_dir: vec4<f32>,
};

@group(0) @binding(0) var<uniform> u: Uniforms;

struct VertexInput {
    @location(0) position: vec3<f32>,
    @location(1) normal: vec3<f32>,
    @location(2) model0: vec4<f32>,
    @location(3) model1: vec4<f32>,
    @location(4) model2: vec4<f32>,
    @location(5) model3: vec4<f32>,
    @location(6) color: vec4<f32>,
};

struct VertexOutput {
    @builtin(position) clip: vec4<f32>,
    @location(0) normal: vec3<f32>,
    @location(1) color: vec4<f32>,
};

@vertex
fn vs_main(in: VertexInput) -> VertexOutput {
    let model = mat4x4<f32>(in.model0, in.model1, in.model2, in.model3);
    var out: VertexOutput;
    out.clip = u.view_proj * (model * vec4<f32>(in.position, 1.0));
    out.normal = (model * vec4<f32>(in.normal, 0.0)).xyz;
    out.color = in.color;
    return out;
}

@fragment
fn fs_main(in: VertexOutput) -> @location(0) vec4<f32> {
    let diffuse = max(dot(normalize(in.normal), normalize(u.light_dir.xyz)), 0.0);
    let shade = 0.35 + 0.65 * diffuse;
    return vec4<f32>(in.color.rgb * shade, in.color.a);
}
"""

# Maps OpenGL clip-space Z [-1, 1] to WebGPU [0, 1] (row-vector convention)
CLIP_CORRECTION = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.5, 0.0],
    [0.0, 0.0, 0.5, 1.0],
], dtype=np.float32)

UNIFORM_SIZE = 80  # mat4x4 + vec4
INSTANCE_STRIDE = 80  # 4 x vec4 model rows + vec4 color
VERTEX_STRIDE = 24  # vec3 position + vec3 normal
DEPTH_FORMAT = wgpu.TextureFormat.depth24plus


def create_sphere_mesh(radius=0.5, n_lat=12, n_lon=16):
    """
    Build a UV sphere.

    Returns:
        tuple: (vertices, indices). Vertices are float32 (n, 6) interleaved
        position and normal, indices are uint32 triangle lists.
    """
    lat = np.linspace(0.0, np.pi, n_lat + 1)
    lon = np.linspace(0.0, 2.0 * np.pi, n_lon + 1)
    theta, phi = np.meshgrid(lat, lon, indexing="ij")
    normals = np.stack([
        np.sin(theta) * np.cos(phi),
        np.cos(theta),
        np.sin(theta) * np.sin(phi),
    ], axis=-1).reshape(-1, 3)
    vertices = np.hstack([normals * radius, normals]).astype(np.float32)

    indices = []
    for i in range(n_lat):
        for j in range(n_lon):
            a = i * (n_lon + 1) + j
            b = a + n_lon + 1
            indices.extend([a, b, a + 1, a + 1, b, b + 1])
    return vertices, np.array(indices, dtype=np.uint32)


def pack_instances(matrices, colors):
    """Interleave (n, 4, 4) matrices and (n, 4) colors into (n, 20) float32 rows."""
    n = len(matrices)
    return np.hstack([
        np.asarray(matrices, dtype=np.float32).reshape(n, 16),
        np.asarray(colors, dtype=np.float32).reshape(n, 4),
    ])


class HeadRenderer:
    """
    Renders the sphere nodes of a scene.

    Args:
        device: wgpu device.
        scene: ``Scene`` whose spheres are drawn.
        render_format: Color target format; can be changed later with
            ``ensure_format``.
    """

    def __init__(self, device, scene, render_format=wgpu.TextureFormat.bgra8unorm):
        self.device = device
        self.scene = scene
        self.render_format = render_format
        self.clear_color = (0.05, 0.05, 0.08, 1.0)
        self.light_dir = np.array([0.4, 0.8, 1.0, 0.0], dtype=np.float32)

        vertices, indices = create_sphere_mesh()
        self.index_count = len(indices)
        self.vertex_buffer = device.create_buffer_with_data(
            data=vertices, usage=wgpu.BufferUsage.VERTEX
        )
        self.index_buffer = device.create_buffer_with_data(
            data=indices, usage=wgpu.BufferUsage.INDEX
        )
        self.uniform_buffer = device.create_buffer(
            size=UNIFORM_SIZE,
            usage=wgpu.BufferUsage.UNIFORM | wgpu.BufferUsage.COPY_DST,
        )

        self.instance_buffer = None
        self.instance_capacity = 0

        self._depth_texture = None
        self._depth_view = None
        self._depth_size = None

        self.bind_group_layout = device.create_bind_group_layout(entries=[{
            "binding": 0,
            "visibility": wgpu.ShaderStage.VERTEX | wgpu.ShaderStage.FRAGMENT,
            "buffer": {"type": wgpu.BufferBindingType.uniform},
        }])
        self.bind_group = device.create_bind_group(
            layout=self.bind_group_layout,
            entries=[{
                "binding": 0,
                "resource": {"buffer": self.uniform_buffer, "offset": 0, "size": UNIFORM_SIZE},
            }],
        )
        self.pipeline_layout = device.create_pipeline_layout(
            bind_group_layouts=[self.bind_group_layout]
        )
        self.shader = device.create_shader_module(code=SHADER_SOURCE)
        self.pipeline = self._create_pipeline(render_format)

    def _create_pipeline(self, render_format):
        instance_attributes = [
            {"format": wgpu.VertexFormat.float32x4, "offset": 16 * i, "shader_location": 2 + i}
            for i in range(5)
        ]
        return self.device.create_render_pipeline(
            layout=self.pipeline_layout,
            vertex={
                "module": self.shader,
                "entry_point": "vs_main",
                "buffers": [
                    {
                        "array_stride": VERTEX_STRIDE,
                        "step_mode": wgpu.VertexStepMode.vertex,
                        "attributes": [
                            {"format": wgpu.VertexFormat.float32x3, "offset": 0, "shader_location": 0},
                            {"format": wgpu.VertexFormat.float32x3, "offset": 12, "shader_location": 1},
                        ],
                    },
                    {
                        "array_stride": INSTANCE_STRIDE,
                        "step_mode": wgpu.VertexStepMode.instance,
                        "attributes": instance_attributes,
                    },
                ],
            },
            primitive={
                "topology": wgpu.PrimitiveTopology.triangle_list,
                "cull_mode": wgpu.CullMode.none,
            },
            depth_stencil={
                "format": DEPTH_FORMAT,
                "depth_write_enabled": True,
                "depth_compare": wgpu.CompareFunction.less,
            },
            multisample=None,
            fragment={
                "module": self.shader,
                "entry_point": "fs_main",
                "targets": [{"format": render_format}],
            },
        )

    def ensure_format(self, render_format):
        """Rebuild the pipeline if the target format changed."""
        if render_format != self.render_format:
            logger.info("Render format changed: %s -> %s", self.render_format, render_format)
            self.render_format = render_format
            self.pipeline = self._create_pipeline(render_format)

    def _ensure_depth(self, size):
        size = (int(size[0]), int(size[1]))
        if self._depth_size == size:
            return
        self._depth_texture = self.device.create_texture(
            size=(size[0], size[1], 1),
            format=DEPTH_FORMAT,
            usage=wgpu.TextureUsage.RENDER_ATTACHMENT,
        )
        self._depth_view = self._depth_texture.create_view()
        self._depth_size = size

    def _upload_instances(self):
        matrices, colors = self.scene.sphere_instances()
        n = len(matrices)
        if n == 0:
            return 0
        if n > self.instance_capacity:
            self.instance_buffer = self.device.create_buffer(
                size=n * INSTANCE_STRIDE,
                usage=wgpu.BufferUsage.VERTEX | wgpu.BufferUsage.COPY_DST,
            )
            self.instance_capacity = n
        self.device.queue.write_buffer(self.instance_buffer, 0, pack_instances(matrices, colors))
        return n

    def draw(self, target_texture_view, aspect_ratio, view_matrix, size, camera_pos=None):
        """
        Draw the scene into ``target_texture_view``.

        Args:
            target_texture_view: Color attachment view.
            aspect_ratio: Width / height of the target.
            view_matrix: Camera view matrix (row-vector convention).
            size: (width, height) of the target in pixels.
            camera_pos: Camera position; the light follows it when given.
        """
        self._ensure_depth(size)

        projection = pyrr.matrix44.create_perspective_projection_matrix(
            45, aspect_ratio, 0.1, 1000.0
        )
        view_proj = np.matmul(view_matrix, np.matmul(projection, CLIP_CORRECTION))
        light_dir = self.light_dir
        if camera_pos is not None:
            light_dir = np.append(np.asarray(camera_pos, dtype=np.float32), 0.0)
        uniforms = np.concatenate([
            np.asarray(view_proj, dtype=np.float32).reshape(16),
            np.asarray(light_dir, dtype=np.float32).reshape(4),
        ])
        self.device.queue.write_buffer(self.uniform_buffer, 0, uniforms)

        n_instances = self._upload_instances()

        encoder = self.device.create_command_encoder()
        render_pass = encoder.begin_render_pass(
            color_attachments=[{
                "view": target_texture_view,
                "load_op": wgpu.LoadOp.clear,
                "store_op": wgpu.StoreOp.store,
                "clear_value": self.clear_color,
            }],
            depth_stencil_attachment={
                "view": self._depth_view,
                "depth_clear_value": 1.0,
                "depth_load_op": wgpu.LoadOp.clear,
                "depth_store_op": wgpu.StoreOp.store,
            },
        )
        if n_instances:
            render_pass.set_pipeline(self.pipeline)
            render_pass.set_bind_group(0, self.bind_group)
            render_pass.set_vertex_buffer(0, self.vertex_buffer)
            render_pass.set_vertex_buffer(1, self.instance_buffer)
            render_pass.set_index_buffer(self.index_buffer, wgpu.IndexFormat.uint32)
            render_pass.draw_indexed(self.index_count, n_instances)
        render_pass.end()
        self.device.queue.submit([encoder.finish()])
