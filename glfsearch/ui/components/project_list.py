import hashlib
import html
import streamlit as st
from typing import Any, Callable, Dict, List, Optional, Sequence

from glfsearch.core.identity import generate_square_avatar
from glfsearch.core.search.filters import is_hidden
from glfsearch.models.projects import Project, format_score

STARRED_COLOR = "#FDB515"  # California Gold
SECONDARY_COLOR = "#8E8E93"


def build_accessories(project: Project, show_scores: bool) -> List[Dict[str, Any]]:
    """
    Indicators shown on the right of a list entry.
    Starred comes first, then score, then status icons.
    """
    accessories = []

    if show_scores and project.score is not None:
        accessories.append({"text": format_score(project.score), "icon": "🎚️"})

    if project.archived:
        accessories.append({"icon": "📦", "color": SECONDARY_COLOR, "tooltip": "Archived project"})

    if project.excluded:
        accessories.append({"icon": "⊗", "color": SECONDARY_COLOR, "tooltip": "Excluded from search"})

    if not project.member:
        accessories.append({"icon": "👁", "color": SECONDARY_COLOR, "tooltip": "Guest project (non-member)"})

    if project.starred:
        accessories.insert(0, {"icon": "♥", "color": STARRED_COLOR, "tooltip": "Starred project"})

    return accessories


def empty_view(search_text: str, show_hidden: bool) -> Dict[str, str]:
    if search_text.strip() == "":
        description = "Start typing to search your GitLab projects"
    elif show_hidden:
        description = f'No projects matching "{search_text}"'
    else:
        description = (
            f'No active projects matching "{search_text}"\n'
            "(Use \"Show Hidden Projects\" to include archived, excluded and guest projects)"
        )
    return {"title": "No Projects Found", "description": description}


def _accessories_html(accessories: Sequence[Dict[str, Any]]) -> str:
    parts = []
    for acc in accessories:
        label = " ".join(x for x in (acc.get("icon"), acc.get("text")) if x)
        style = f"color:{acc['color']};" if acc.get("color") else ""
        title = f" title=\"{html.escape(acc['tooltip'])}\"" if acc.get("tooltip") else ""
        parts.append(f"<span style='{style} margin-left:0.5em'{title}>{label}</span>")
    return "".join(parts)


def render(
    projects: Sequence[Project],
    show_scores: bool = False,
    on_copy: Optional[Callable[[str, str], None]] = None,
    on_select: Optional[Callable[[Project], None]] = None,
):
    """
    Renders the result list in relevance order.
    Pure render component; actions are delegated to the callbacks.
    """
    for project in projects:
        safe_key = hashlib.md5(project.path.encode("utf-8")).hexdigest()
        avatar = generate_square_avatar(project.name, is_hidden(project))

        with st.container():
            c_icon, c_title, c_acc, c_actions = st.columns([1, 6, 3, 2])
            c_icon.markdown(f'<img src="{avatar}" width="40" height="40"/>', unsafe_allow_html=True)
            c_title.markdown(f"**{html.escape(project.name)}**  \n<span style='color:grey; font-size:0.85em'>{html.escape(project.path)}</span>", unsafe_allow_html=True)
            c_acc.markdown(_accessories_html(build_accessories(project, show_scores)), unsafe_allow_html=True)

            with c_actions.popover("Actions"):
                if project.url:
                    st.link_button("Open in Browser", project.url)
                if st.button("Copy URL", key=f"copy_url_{safe_key}") and on_copy:
                    on_copy("URL", project.url)
                if st.button("Copy Path", key=f"copy_path_{safe_key}") and on_copy:
                    on_copy("Path", project.path)
                if st.button("Details", key=f"details_{safe_key}") and on_select:
                    on_select(project)
