"""
Image Collager — browser preview

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import streamlit as st

from image_collager.config import CollageConfig
from image_collager.driver import build_collage
from image_collager.errors import DecodeError, InvalidLayout
from image_collager.geometry import Shape
from image_collager.image_source import decode_image

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Image Collager",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = CollageConfig()

st.title("Image Collager")
st.caption(
    "Upload a handful of images and arrange them into rows, either as "
    "tightly packed rectangles or as circles with generous spacing."
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    shape = Shape(st.radio(
        "Shape", [s.value for s in Shape], index=0, horizontal=True,
    ))
with ctrl2:
    rows = st.slider("Rows", 1, 10, _DEFAULTS.rows)
with ctrl3:
    width = st.slider("Width (px)", 100, 4000, _DEFAULTS.width, step=50)

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select images",
    type=["jpg", "jpeg", "png", "webp", "bmp", "gif", "tif", "tiff"],
    accept_multiple_files=True,
)

images = []
skipped = 0
for f in uploaded or []:
    try:
        images.append(decode_image(io.BytesIO(f.getvalue())))
    except DecodeError:
        skipped += 1
if skipped:
    st.warning(f"{skipped} file(s) could not be decoded and were left out.")

if images and st.button("COMPOSE", type="primary", use_container_width=True):
    t0 = time.perf_counter()
    try:
        layout, canvas = build_collage(images, rows, shape, width, wait=True)
    except InvalidLayout as exc:
        st.error(str(exc))
        st.stop()
    elapsed = time.perf_counter() - t0

    result = canvas.to_image()
    st.image(result, use_container_width=True)

    buf = io.BytesIO()
    result.save(buf, format="PNG")
    st.download_button(
        "SAVE COLLAGE",
        data=buf.getvalue(),
        file_name="collage.png",
        mime="image/png",
    )

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Canvas", f"{result.width} × {result.height}")
    m2.metric("Images", f"{len(images)}")
    m3.metric("Layout", f"{layout.rows} × {layout.max_columns}")
    m4.metric("Time", f"{elapsed:.2f} s")
