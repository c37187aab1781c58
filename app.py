import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from components.analysis import group_table, segment_length_table, trie_summary
from components.workload import TOKEN_MODES, WorkLoad, parse_sequences
from tries import LengthGroupedNode, RenderConfig, SegmentedTrie, render_tree

# Configure page
st.set_page_config(
    page_title="Segmented Trie Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 Segmented Trie Explorer")
st.markdown("---")

SAMPLE_INPUT = "ape\napp\napplication\nbans\nbat\nbanner\npot\npotion"
WORKLOADS = ["Words", "Sentences", "Integers", "IPv4", "URLs"]

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox("Choose a section:", ["Build", "Workloads"])

    st.markdown("---")
    st.subheader("Rendering")
    separator = st.text_input("Token separator", value="")
    marker = st.text_input("Terminal marker", value=".")
    compress = st.checkbox("Compress unary chains", value=False)
    on_collision = st.radio("Grandchild collisions", ["overwrite", "merge"])


def render_config(default_separator=""):
    return RenderConfig(
        token_separator=separator or default_separator,
        terminal_marker=marker,
        compress_chains=compress,
    )


def show_structures(sequences, default_separator=""):
    """Draw both tries and the comparison charts for `sequences`."""
    trie = SegmentedTrie.from_sequences(sequences)
    grouped = LengthGroupedNode.from_trie(trie, on_collision=on_collision)
    config = render_config(default_separator)

    summary = trie_summary(sequences, on_collision=on_collision)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Sequences", len(set(map(tuple, sequences))))
    with col2:
        st.metric("Standard nodes", int(summary.loc[0, "nodes"]))
    with col3:
        st.metric("Segmented nodes", int(summary.loc[1, "nodes"]))
    with col4:
        st.metric("Grouped nodes", int(summary.loc[2, "nodes"]))

    left, right = st.columns(2)
    with left:
        st.subheader("Segmented trie")
        st.code(render_tree(trie.root, config) or "(empty)", language=None)
    with right:
        st.subheader("Length-grouped trie")
        st.code(render_tree(grouped, config) or "(empty)", language=None)

    tab1, tab2, tab3 = st.tabs(["Structure comparison", "Segment lengths", "Length groups"])

    with tab1:
        st.dataframe(summary, use_container_width=True)
        fig = go.Figure()
        fig.add_trace(go.Bar(x=summary["structure"], y=summary["nodes"], name="nodes"))
        fig.add_trace(go.Bar(x=summary["structure"], y=summary["avg_branch_factor"], name="avg branch factor"))
        fig.update_layout(barmode="group", title="Nodes and branching per structure")
        st.plotly_chart(fig, use_container_width=True)

    with tab2:
        lengths = segment_length_table(trie)
        if lengths.empty:
            st.info("The trie has no edges")
        else:
            fig = px.bar(lengths, x="length", y="edges", title="Edges per segment length")
            st.plotly_chart(fig, use_container_width=True)
            mean_len = np.average(lengths["length"], weights=lengths["edges"])
            st.write(f"**Mean segment length:** {mean_len:.2f} tokens")

    with tab3:
        groups = group_table(grouped, token_separator=config.token_separator)
        if groups.empty:
            st.info("No length groups")
        else:
            st.dataframe(groups, use_container_width=True)
            per_depth = groups.groupby("depth")["segments"].sum().reset_index()
            fig = px.line(per_depth, x="depth", y="segments", markers=True,
                          title="Segments folded per depth")
            st.plotly_chart(fig, use_container_width=True)


if page == "Build":
    st.header("✏️ Build from literal sequences")
    mode = st.radio("Tokens", TOKEN_MODES, horizontal=True)
    text = st.text_area("One sequence per line", value=SAMPLE_INPUT, height=200)

    try:
        sequences = parse_sequences(text, mode)
    except ValueError as e:
        st.error(f"❌ Could not parse input: {e}")
        sequences = None

    if sequences is not None:
        show_structures(sequences, default_separator="" if mode == "chars" else " ")

elif page == "Workloads":
    st.header("🎲 Generated workloads")

    col1, col2, col3 = st.columns(3)
    with col1:
        kind = st.selectbox("Workload", WORKLOADS)
    with col2:
        size = st.slider("Sequences", min_value=5, max_value=500, value=40, step=5)
    with col3:
        seed = st.number_input("Seed", min_value=0, value=7, step=1)

    workload = WorkLoad(seed=int(seed))
    try:
        if kind == "Words":
            p_freq = st.slider("Prefix frequency", 0.0, 1.0, 0.5)
            sequences, sep = [tuple(w) for w in workload.words(size, p_freq=p_freq)], ""
        elif kind == "Sentences":
            p_freq = st.slider("Shared opening frequency", 0.0, 1.0, 0.4)
            sequences, sep = workload.sentences(size, p_freq=p_freq), " "
        elif kind == "Integers":
            alphabet = st.slider("Alphabet size", 2, 20, 4)
            sequences, sep = workload.integers(size, alphabet=alphabet), "-"
        elif kind == "IPv4":
            subnet_share = st.slider("Shared /24 subnet share", 0.0, 1.0, 0.5)
            sequences, sep = workload.ips(size, subnet_share=subnet_share), "."
        else:
            sequences, sep = workload.urls(size), "/"
    except ValueError as e:
        st.error(f"❌ {e}")
        sequences = None

    if sequences:
        with st.expander("Sequences"):
            st.dataframe(pd.DataFrame({"sequence": [" ".join(map(str, s)) for s in sequences]}))
        show_structures(sequences, default_separator=sep)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Segmented Trie Explorer
    </div>
    """,
    unsafe_allow_html=True
)
