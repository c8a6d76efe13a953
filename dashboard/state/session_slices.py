import streamlit as st


PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    return get_slice(slice_name).get(name, default)


def set_value(slice_name, name, value):
    get_slice(slice_name)[name] = value


def clear_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key in st.session_state:
        del st.session_state[key]
