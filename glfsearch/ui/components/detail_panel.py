import streamlit as st
from typing import Optional

from glfsearch.models.projects import Project


def render(project: Optional[Project], title: str = "Details"):
    """
    Renders all fields of a project, scores included when present.
    Pure render component, no glf access.
    """
    st.subheader(title)
    if not project:
        st.info("Select a project to see its details.")
        return

    if project.description:
        st.caption(project.description)
    st.json(project.to_dict())
