TAB_OPTIONS = [
    "Overview",
    "Expenses",
    "Todos",
    "Projects",
    "Entertainment",
    "Profile",
]

EXPENSE_CATEGORIES = ["Food", "Transport", "Shopping", "Bills", "Entertainment", "Other"]

PROJECT_STATUSES = [
    ("idea", "Idea"),
    ("in_progress", "In Progress"),
    ("done", "Done"),
]
PROJECT_STATUS_LABELS = {key: label for key, label in PROJECT_STATUSES}

ENTERTAINMENT_TYPES = [
    ("game", "Game"),
    ("movie", "Movie"),
    ("series", "Series"),
]
ENTERTAINMENT_TYPE_LABELS = {key: label for key, label in ENTERTAINMENT_TYPES}
ENTERTAINMENT_STATUS_OPTIONS = {
    "game": [("backlog", "Backlog"), ("playing", "Playing"), ("completed", "Completed")],
    "movie": [("backlog", "Watchlist"), ("watching", "Watching"), ("watched", "Watched")],
    "series": [("backlog", "Watchlist"), ("watching", "Watching"), ("watched", "Watched")],
}
ENTERTAINMENT_ICONS = {"game": "🎮", "movie": "🎬", "series": "📺"}

TREND_LINE_COLOR = "#8B5CF6"
