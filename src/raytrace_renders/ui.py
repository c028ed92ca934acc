import math
import gradio as gr
from raytrace_renders.config import RenderConfig
from raytrace_renders.rendering import render
from raytrace_renders.scenes import SCENES, build_scene, orbit_eye
from raytrace_renders.utils import to_image

# Keep the previous frame visible while the next one renders
CSS = """
.gradio-container { background-color: #0b0f19 !important; color: #e5e7eb !important; }
#output_img { background-color: #0b0f19 !important; border-radius: 8px; overflow: hidden; border: none !important; }
#output_img img { object-fit: contain; }

.generating, .pending {
    opacity: 1 !important;
    filter: none !important;
    transition: none !important;
}

.loading, .progress-view, .loader, .spinner {
    display: none !important;
    visibility: hidden !important;
}
"""

DEFAULTS = ["demo", 0.0, 3.0, 8.0, 60, 2, 200]


def render_frame(scene, orbit_deg, height, distance, fov, bounces, resolution):
    """Render one viewport frame as a PIL image (4:3 aspect)."""
    config = RenderConfig(max_bounces=int(bounces))
    _, _, target = SCENES[scene]
    eye = orbit_eye(target, distance, math.radians(orbit_deg), height)
    w = int(resolution)
    h = int(resolution * 0.75)
    camera, world = build_scene(scene, w, h, math.radians(fov), config, eye=eye)
    return to_image(render(camera, world))


def create_ui():

    with gr.Blocks(title="Ray Tracer") as demo:

        gr.Markdown("# Ray Tracer: Interactive Viewport")
        gr.Markdown("Orbit the camera around a scene and tune recursion depth.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### 🎥 Camera")
                    scene_dropdown = gr.Dropdown(choices=sorted(SCENES), value="demo", label="Scene")
                    orbit_slider = gr.Slider(minimum=-180, maximum=180, value=0.0, step=1, label="Orbit (degrees)",
                                             info="Azimuth around the scene target")
                    height_slider = gr.Slider(minimum=-2, maximum=10, value=3.0, step=0.1, label="Eye Height",
                                              info="Above the scene target")
                    distance_slider = gr.Slider(minimum=2, maximum=20, value=8.0, step=0.1, label="Distance")
                    fov_slider = gr.Slider(minimum=10, maximum=150, value=60, label="Field of View (FOV)")
                    res_slider = gr.Slider(minimum=64, maximum=640, value=200, step=32, label="Render Resolution",
                                           info="Lower for speed, higher for quality")
                    reset_btn = gr.Button("🔄 Reset Viewport", variant="secondary")

                with gr.Group():
                    gr.Markdown("### ✨ Shading")
                    bounce_slider = gr.Slider(minimum=1, maximum=8, value=2, step=1, label="Max Bounces",
                                              info="Reflection/refraction recursion depth")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Viewport", interactive=False, elem_id="output_img")

        inputs = [scene_dropdown, orbit_slider, height_slider, distance_slider,
                  fov_slider, bounce_slider, res_slider]

        def reset_view():
            return list(DEFAULTS)

        reset_btn.click(fn=reset_view, outputs=inputs)

        for input_comp in inputs:
            input_comp.change(fn=render_frame, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        demo.load(fn=render_frame, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo


if __name__ == "__main__":
    demo = create_ui()
    demo.launch(css=CSS)
