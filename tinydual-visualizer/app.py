import streamlit as st
import numpy as np
import sys
import os

# Add tinydual to path
sys.path.insert(0, os.path.abspath('..'))

from tinydual.config import LayoutConfig
from tinydual.layout import DEFAULT_CONNECTIONS, to_points
from tinydual.render import layout_figure
from tinydual.report import LossHistory, chain, every

st.set_page_config(page_title="Point Layout Visualizer", layout="wide")

st.title("Point Layout by Gradient Descent")

# ============================================
# Sidebar Controls
# ============================================

st.sidebar.header("Configuration")

points = st.sidebar.slider("Points", 2, 10, 10)
iterations = st.sidebar.number_input("Iterations", 0, 5000, 300)
learning_rate = st.sidebar.slider("Learning Rate", 0.001, 0.05, 0.01, 0.001)
connection_weight = st.sidebar.slider("Connection weight", 0.0, 20.0, 10.0, 0.5)
snapshot_every = st.sidebar.number_input("Snapshot every", 1, 100, 10)

connections = [(i, j) for i, j in DEFAULT_CONNECTIONS if i < points and j < points]

if 'history' not in st.session_state:
    st.session_state.history = None


class Snapshots:
    def __init__(self):
        self.iterations = []
        self.vars = []

    def __call__(self, i, vars):
        self.iterations.append(i)
        self.vars.append(np.array(vars))


def run(cfg):
    snaps = Snapshots()
    layout = cfg.build_layout()
    losses = LossHistory(layout.loss)
    layout.hook = every(int(snapshot_every), chain(snaps, losses))

    with st.spinner("Optimizing..."):
        result = layout.optimize(cfg.start(), cfg.iterations, cfg.learning_rate)

    snaps(cfg.iterations, result)
    losses(cfg.iterations, result)
    return {'layout': layout, 'snapshots': snaps, 'loss': losses.values}


# ============================================
# Main Interface
# ============================================

col1, col2 = st.columns([2, 1])

with col2:
    st.subheader("Controls")
    if st.button("Optimize"):
        cfg = LayoutConfig(
            points=points,
            iterations=int(iterations),
            learning_rate=learning_rate,
            connection_weight=connection_weight,
            connections=connections,
        )
        st.session_state.history = run(cfg)
        final = st.session_state.history['loss'][-1]
        if np.isfinite(final):
            st.success(f"Final loss: {final:.6f}")
        else:
            st.warning("Loss is not finite, points overlapped or diverged")

with col1:
    history = st.session_state.history
    if history is None:
        fig = layout_figure(connections, to_points(LayoutConfig(points=points, connections=connections).start()))
        st.pyplot(fig)
    else:
        snaps = history['snapshots']
        k = st.slider("Snapshot", 0, len(snaps.vars) - 1, len(snaps.vars) - 1)
        vars = snaps.vars[k]
        layout = history['layout']

        fig = layout_figure(layout.connections, to_points(vars))
        if st.checkbox("Show descent direction"):
            # arrows along -gradient, in canvas coordinates
            g = -layout.loss(vars).partials.reshape(-1, 2)
            p = vars.reshape(-1, 2) + 2.5
            ax = fig.axes[0]
            ax.quiver(p[:, 0], p[:, 1], g[:, 0], g[:, 1], color="tab:red",
                      angles="xy", scale_units="xy", scale=max(1.0, float(np.abs(g).max())) * 2)
        st.caption(f"iteration {snaps.iterations[k]}")
        st.pyplot(fig)

        st.subheader("Loss")
        st.line_chart(history['loss'])
