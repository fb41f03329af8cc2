"""CSS for roadmap widgets and modals."""

ROADMAP_TREE_CSS = """
RoadmapTree {
    height: 1fr;
    padding: 0 1;
    width: 1fr;
    overflow-x: hidden;
    scrollbar-gutter: stable;
    scrollbar-size: 1 1;
    scrollbar-background: $surface;
    scrollbar-color: $surface-lighten-2;
}

RoadmapTree > .tree--guides {
    color: $text-muted;
}

RoadmapTree > .tree--cursor {
    background: $surface-lighten-1;
    color: $text;
    text-style: none;
}

RoadmapTree:focus > .tree--cursor {
    background: $surface-lighten-2;
    color: $text;
    text-style: bold;
}

RoadmapTree > .tree--highlight-line {
    background: $surface-lighten-1;
}
"""

MODAL_BASE_CSS = """
RoadmapModalBase {
    align: center middle;
    background: $surface 60%;
}

RoadmapModalBase > Vertical {
    width: 64;
    height: auto;
    max-height: 80%;
    background: $surface;
    border: solid $surface-lighten-2;
    padding: 1 2;
}

RoadmapModalBase .modal-title {
    text-style: bold;
    color: $text;
    text-align: center;
    padding: 1 0;
    margin-bottom: 1;
    border-bottom: solid $surface-lighten-1;
}

RoadmapModalBase .modal-label {
    color: $text-muted;
    padding: 0 0 1 0;
}

RoadmapModalBase .modal-actions {
    height: auto;
    padding: 1 0 0 0;
    margin-top: 1;
    border-top: solid $surface-lighten-1;
    align: center middle;
}

RoadmapModalBase .modal-actions Button {
    margin: 0 1;
}
"""

CONFIRM_DELETE_MODAL_CSS = """
ConfirmDeleteModal > Vertical {
    border-top: solid $error;
}

ConfirmDeleteModal .modal-title {
    border-bottom: none;
}

ConfirmDeleteModal .task-info {
    margin-bottom: 1;
    color: $text-muted;
}

ConfirmDeleteModal Button#btn-delete {
    background: $error-darken-2;
}
"""

ADD_SUBTASK_MODAL_CSS = """
AddSubtaskModal Input {
    margin-bottom: 1;
    background: $surface-lighten-1;
    border: none;
}

AddSubtaskModal Input:focus {
    background: $surface-lighten-2;
    border: none;
}
"""

STATS_MODAL_CSS = """
StatsModal .stats-body {
    height: auto;
    padding: 0 1;
}
"""
