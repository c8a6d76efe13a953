import streamlit as st

from dashboard.data import repositories


def render_profile_tab(ctx):
    st.subheader("Profile")
    if not ctx.user_email:
        st.info("Sign in to edit your profile.")
        return
    try:
        profile = repositories.get_profile()
    except RuntimeError as exc:
        st.error(f"Could not load profile: {exc}")
        return

    cols = st.columns([1, 3])
    with cols[0]:
        if profile.get("avatar_url"):
            st.image(profile["avatar_url"], width=128)
        else:
            st.markdown(f"# {(profile.get('username') or '?')[:1].upper()}")
    with cols[1]:
        st.markdown(f"**Email:** {ctx.user_email}")
        st.markdown(f"**Username:** {profile.get('username') or 'Not set'}")
        if profile.get("created_at"):
            st.caption(f"Member since {str(profile['created_at'])[:10]}")

    with st.form("profile.form"):
        username = st.text_input("Username", value=profile.get("username") or "")
        avatar_url = st.text_input("Avatar URL", value=profile.get("avatar_url") or "")
        submitted = st.form_submit_button("Save")
    if not submitted:
        return
    if len(username.strip()) < 3:
        st.error("Username must be at least 3 characters")
        return
    try:
        repositories.save_profile(username=username.strip(), avatar_url=avatar_url.strip())
    except RuntimeError as exc:
        st.error(f"Could not save profile: {exc}")
        return
    st.rerun()
