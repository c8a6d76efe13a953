import streamlit as st


def render_profile_header(ctx):
    profile = (ctx.get("overview") or {}).get("profile") or {}
    name = ctx.user_name or "User"
    avatar_url = profile.get("avatar_url")

    cols = st.columns([1, 8])
    with cols[0]:
        if avatar_url:
            st.image(avatar_url, width=56)
        else:
            st.markdown(f"## {name[:1].upper() or '?'}")
    with cols[1]:
        st.markdown(f"**{name}**")
        st.caption("Welcome back! 👋")
    if not ctx.backend_ok:
        st.warning("Backend unavailable. Showing an empty dashboard for now.")
