from typing import List, Sequence

from glfsearch.models.projects import Project


def is_hidden(project: Project) -> bool:
    """Archived, excluded and guest (non-member) projects are hidden by default."""
    return project.archived or project.excluded or not project.member


def filter_projects(projects: Sequence[Project], show_hidden: bool = False) -> List[Project]:
    # Relevance order from glf is kept as-is
    if show_hidden:
        return list(projects)
    return [p for p in projects if not is_hidden(p)]
