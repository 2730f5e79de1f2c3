"""
dashboard.py — Streamlit live dashboard for the Evolvera civilization simulation.

Launch:
    streamlit run dashboard.py

Reads only saves/run.csv and saves/demo.json — the simulation itself is
never imported.  The CSV grows row by row while a run is in progress; the
snapshot (name, Ages, unlocks) only appears once the run finishes.
Auto-refreshes at 1 FPS via streamlit-autorefresh (falls
back to a manual Refresh button when the package is not installed).
"""

import csv
import json
import pathlib
import numpy as np
import streamlit as st
import plotly.graph_objects as go
import plotly.express as px

# ── Optional: streamlit-autorefresh for polling ──────────────────────────
try:
    from streamlit_autorefresh import st_autorefresh as _st_autorefresh
    _HAS_AUTOREFRESH = True
except ImportError:
    _HAS_AUTOREFRESH = False

CSV_PATH      = pathlib.Path("saves/run.csv")
SNAPSHOT_PATH = pathlib.Path("saves/demo.json")

_DOMAINS = ['survival', 'production', 'warfare', 'exploration', 'social', 'expression']

# One colour per domain, same order as _DOMAINS
_DOMAIN_COLORS = [
    '#66FF99',   # survival     — green
    '#FFB347',   # production   — amber
    '#FF4B4B',   # warfare      — red
    '#66ECFF',   # exploration  — cyan
    '#6699FF',   # social       — blue
    '#CC66FF',   # expression   — violet
]


# ══════════════════════════════════════════════════════════════════════════
# Data loading — TTL-cached, keyed on file mtime
# ══════════════════════════════════════════════════════════════════════════

@st.cache_data(ttl=2)
def _read_csv(mtime: float) -> list | None:          # mtime is the cache-bust key
    try:
        with open(CSV_PATH, newline='', encoding='utf-8') as fh:
            return list(csv.DictReader(fh))
    except FileNotFoundError:
        return None


@st.cache_data(ttl=2)
def _read_snapshot(mtime: float) -> dict | None:
    try:
        return json.loads(SNAPSHOT_PATH.read_text(encoding='utf-8'))
    except (FileNotFoundError, json.JSONDecodeError):
        return None


def _mtime(path: pathlib.Path) -> float | None:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


def load_turns() -> list | None:
    m = _mtime(CSV_PATH)
    return None if m is None else _read_csv(m)


def load_snapshot() -> dict | None:
    m = _mtime(SNAPSHOT_PATH)
    return None if m is None else _read_snapshot(m)


def domain_matrix(rows: list) -> np.ndarray:
    """turns × 6 float array of domain values, in _DOMAINS column order."""
    if not rows:
        return np.zeros((0, len(_DOMAINS)))
    return np.array([[float(r[d]) for d in _DOMAINS] for r in rows], dtype=float)


# ══════════════════════════════════════════════════════════════════════════
# Figures
# ══════════════════════════════════════════════════════════════════════════

def _dark(fig: go.Figure, title: str, height: int = 320) -> go.Figure:
    fig.update_layout(
        title=dict(text=title, font=dict(color='#dddddd', size=13), x=0.0),
        paper_bgcolor='#0e1117',
        plot_bgcolor='#111827',
        font=dict(color='white'),
        legend=dict(bgcolor='rgba(0,0,0,0)', font=dict(color='white', size=11)),
        margin=dict(l=50, r=60, t=40, b=50),
        height=height,
    )
    return fig


def build_domain_chart(rows: list, ages: list) -> go.Figure:
    """Domain values per turn, with dotted 15-point tiers and Age markers."""
    turns = [int(r['turn']) for r in rows]
    mat   = domain_matrix(rows)
    fig   = go.Figure()
    for idx, name in enumerate(_DOMAINS):
        fig.add_trace(go.Scatter(
            x=turns, y=mat[:, idx],
            mode='lines',
            line=dict(color=_DOMAIN_COLORS[idx], width=2),
            name=name.title(),
            hovertemplate=f'<b>{name.title()}</b>: %{{y:.2f}}<br>Turn %{{x}}<extra></extra>',
        ))
    top = float(mat.max()) if mat.size else 15.0
    for y_val in range(15, int(top) + 16, 15):
        fig.add_hline(y=y_val, line_dash='dot', line_color='#888888', opacity=0.5)
    for a in ages:
        fig.add_vline(x=a['started_turn'], line_color='#FAFF66', opacity=0.35)
    fig.update_xaxes(title='Turn', gridcolor='#1e2233')
    fig.update_yaxes(title='Value', gridcolor='#1e2233')
    return _dark(fig, 'Domain Progression', height=380)


def build_ni_chart(rows: list) -> go.Figure:
    turns = [int(r['turn']) for r in rows]
    ni    = [float(r['ni']) for r in rows]
    fig   = go.Figure(go.Scatter(x=turns, y=ni, mode='lines',
                                 line=dict(color='#FFFFFF', width=2), name='NI'))
    fig.add_hline(y=9.0, line_dash='dot', line_color='#44ff88', opacity=0.6,
                  annotation_text='  Unity', annotation_position='right',
                  annotation_font_color='#44ff88')
    fig.update_yaxes(range=[-0.5, 10.5], title='NI', gridcolor='#1e2233')
    fig.update_xaxes(title='Turn', gridcolor='#1e2233')
    return _dark(fig, 'National Identity')


def build_xp_heatmap(rows: list) -> go.Figure:
    """Per-turn domain gain (first difference) as a heatmap."""
    mat  = domain_matrix(rows)
    gain = np.diff(mat, axis=0) if len(mat) > 1 else np.zeros((1, len(_DOMAINS)))
    fig  = px.imshow(gain.T, aspect='auto', color_continuous_scale='RdYlGn',
                     color_continuous_midpoint=0.0,
                     labels=dict(x='Turn', y='Domain', color='Δ'),
                     y=[d.title() for d in _DOMAINS])
    return _dark(fig, 'Per-turn Gain')


# ══════════════════════════════════════════════════════════════════════════
# Page config — must be first Streamlit call
# ══════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title='Evolvera — Live Dashboard',
    page_icon='🏛',
    layout='wide',
    initial_sidebar_state='expanded',
)

if _HAS_AUTOREFRESH:
    _st_autorefresh(interval=1000, key='sim_autorefresh')

rows = load_turns()
snap = load_snapshot()

# ══════════════════════════════════════════════════════════════════════════
# Sidebar
# ══════════════════════════════════════════════════════════════════════════

with st.sidebar:
    st.title('🏛 Evolvera')
    st.caption('Civilization Simulation · Run Monitor')

    if not _HAS_AUTOREFRESH:
        if st.button('⟳  Refresh', use_container_width=True):
            st.cache_data.clear()
            st.rerun()
        st.caption('Auto-refresh unavailable.\n`pip install streamlit-autorefresh`')

    st.divider()

    if snap is None:
        st.warning(
            '**Waiting for simulation data…**\n\n'
            'Run the simulation first:\n\n```\npython -m evolvera\n```'
        )
    else:
        st.metric('🏷  Civilization', snap['name'])
        st.metric('⏱  Turns',        str(len(rows or [])))
        st.metric('🧭 NI',           f"{snap['ni']:.2f}")
        st.metric('📜 Ages',         str(len(snap['age_history'])))
        st.metric('🔓 Unlocks',      str(len(snap['capabilities'])))

        st.divider()
        st.subheader('Domains')
        for idx, d in enumerate(_DOMAINS):
            val = snap['domains'][d.title()]
            st.markdown(
                f'<span style="color:{_DOMAIN_COLORS[idx]}">●</span> '
                f'**{d.title()}** {val:.2f}',
                unsafe_allow_html=True,
            )

# ══════════════════════════════════════════════════════════════════════════
# Main panel
# ══════════════════════════════════════════════════════════════════════════

if not rows:
    st.info(
        '**saves/run.csv** not found yet.  \n'
        'Start the simulation (`python -m evolvera`) to populate it.'
    )
    st.stop()

ages = snap['age_history'] if snap else []
last = rows[-1]
st.markdown(
    f'### Turn **{last["turn"]}** &nbsp;·&nbsp; NI {float(last["ni"]):.1f} '
    f'&nbsp;·&nbsp; {len(ages)} Ages',
    unsafe_allow_html=True,
)

col_left, col_right = st.columns([3, 2], gap='medium')

with col_left:
    st.plotly_chart(build_domain_chart(rows, ages), use_container_width=True,
                    key='domain_chart', config={'displayModeBar': False})
    st.plotly_chart(build_xp_heatmap(rows), use_container_width=True,
                    key='xp_heatmap', config={'displayModeBar': False})

with col_right:
    st.plotly_chart(build_ni_chart(rows), use_container_width=True,
                    key='ni_chart', config={'displayModeBar': False})

    st.subheader('Age Timeline')
    timeline = '\n'.join(
        f"{a['id']}  T{a['started_turn']:02d}  {a['name']}"
        for a in reversed(ages)
    )
    st.text_area(
        label='Ages',
        value=timeline or '(no Ages yet)',
        height=215,
        disabled=True,
        key='age_feed',
        label_visibility='collapsed',
    )
