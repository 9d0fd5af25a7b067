"""ensgraph Streamlit UI: separate from the service package, uses backend APIs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Allow importing ui.lib when running as: streamlit run ui/app.py
if str(Path(__file__).resolve().parent) not in sys.path:
    sys.path.insert(0, str(Path(__file__).resolve().parent))

import streamlit as st

from lib.api import (
    ApiError,
    add_connection,
    get_base_url,
    get_graph,
    get_graph_image,
    get_profile,
    health,
    ready,
)
from lib.profiles import (
    SELECTED_NODE_KEY,
    cached_profile,
    remember_profile,
    selected_profile,
)


def truncate_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def render_profile_card(profile: dict | None) -> None:
    if not profile or not profile.get("address"):
        st.info("ENS name not found")
        return

    with st.container(border=True):
        cols = st.columns([1, 3])
        with cols[0]:
            if profile.get("avatar"):
                st.image(profile["avatar"], width=96)
            else:
                st.markdown(f"## {profile['ensName'][:1].upper()}")
        with cols[1]:
            st.subheader(profile["ensName"])
            st.caption(truncate_address(profile["address"]))
            st.code(profile["address"], language=None)

        if profile.get("twitter"):
            st.markdown(f"**Twitter:** [@{profile['twitter']}](https://twitter.com/{profile['twitter']})")
        if profile.get("github"):
            st.markdown(f"**GitHub:** [{profile['github']}](https://github.com/{profile['github']})")
        if profile.get("email"):
            st.markdown(f"**Email:** [{profile['email']}](mailto:{profile['email']})")


def load_profile(ens_name: str) -> bool:
    try:
        with st.spinner(f"Resolving {ens_name}…"):
            remember_profile(st.session_state, ens_name, get_profile(ens_name))
    except Exception as e:
        remember_profile(st.session_state, ens_name, None)
        st.error(f"Failed to fetch profile: {e}")
        return False
    return True


# Page config
st.set_page_config(
    page_title="ENS Network Graph",
    page_icon="◯",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.sidebar.title("ensgraph")
st.sidebar.caption("Visualize connections between ENS names")
nav = st.sidebar.radio(
    "Section",
    ["Network", "Profile", "Health"],
    label_visibility="collapsed",
)

api_url = st.sidebar.text_input(
    "API base URL",
    value=get_base_url(),
    help="Backend API root, e.g. http://localhost:8000",
)
if api_url:
    os.environ["ENSGRAPH_API_URL"] = api_url.rstrip("/")

# ----- Network tab -----
if nav == "Network":
    st.header("ENS Network Graph")
    graph_col, profile_col = st.columns([2, 1])

    with graph_col:
        with st.expander("Add connection", expanded=False):
            with st.form("connection_form", clear_on_submit=True):
                source_ens = st.text_input("Source ENS", placeholder="vitalik.eth")
                target_ens = st.text_input("Target ENS", placeholder="balajis.eth")
                submitted = st.form_submit_button("Connect")

            if submitted:
                if not source_ens.strip() or not target_ens.strip():
                    st.error("Both ENS names are required.")
                else:
                    try:
                        result = add_connection(source_ens, target_ens)
                    except ApiError as e:
                        st.error(str(e))
                    except Exception as e:
                        st.error(f"Failed to add connection: {e}")
                    else:
                        verb = "Added" if result.get("created") else "Already connected:"
                        st.success(
                            f"{verb} {result['sourceNode']['ensName']} → "
                            f"{result['targetNode']['ensName']}"
                        )

        try:
            graph_data = get_graph()
        except Exception as e:
            st.error(f"Failed to load graph data: {e}")
            graph_data = {"nodes": [], "links": []}

        nodes = graph_data.get("nodes", [])
        links = graph_data.get("links", [])
        if not nodes:
            st.info("No connections yet. Add one above.")
        else:
            st.caption(f"Nodes: **{len(nodes)}** · Links: **{len(links)}**")
            with st.spinner("Rendering graph…"):
                try:
                    st.image(get_graph_image("png"), use_container_width=True)
                except Exception as e:
                    st.error(f"Failed to render graph: {e}")

    with profile_col:
        st.subheader("Profile")
        names = sorted(n["ensName"] for n in nodes)
        selected = st.selectbox(
            "Select a node to view details",
            options=names,
            index=None,
            placeholder="Choose an ENS name",
        )
        if selected and selected != st.session_state.get(SELECTED_NODE_KEY):
            st.session_state[SELECTED_NODE_KEY] = selected
            load_profile(selected)

        if st.session_state.get(SELECTED_NODE_KEY):
            render_profile_card(selected_profile(st.session_state))
        else:
            st.caption("No profile selected")

# ----- Profile tab -----
elif nav == "Profile":
    st.header("Profile lookup")

    with st.form("profile_form"):
        ens_name = st.text_input("ENS name", value="vitalik.eth")
        submitted = st.form_submit_button("Resolve")

    if submitted:
        if not ens_name.strip():
            st.error("ENS name is required.")
        else:
            name = ens_name.strip()
            if load_profile(name):
                render_profile_card(cached_profile(st.session_state, name))

# ----- Health tab -----
elif nav == "Health":
    st.header("Health")
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Health")
        try:
            st.json(health())
        except Exception as e:
            st.error(str(e))
    with col2:
        st.subheader("Ready")
        try:
            st.json(ready())
        except Exception as e:
            st.error(str(e))
