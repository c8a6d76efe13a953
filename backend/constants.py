PROFILES_TABLE = "profiles"
EXPENSES_TABLE = "expenses"
TODOS_TABLE = "todos"
PROJECTS_TABLE = "projects"
ENTERTAINMENT_TABLE = "entertainment"

EXPENSE_CATEGORIES = ["Food", "Transport", "Shopping", "Bills", "Entertainment", "Other"]
CATEGORY_COLORS = {
    "Food": "#8B5CF6",
    "Transport": "#EC4899",
    "Shopping": "#F59E0B",
    "Bills": "#10B981",
    "Entertainment": "#3B82F6",
    "Other": "#6B7280",
}
DEFAULT_CATEGORY_COLOR = CATEGORY_COLORS["Other"]

PROJECT_STATUSES = ["idea", "in_progress", "done"]

ENTERTAINMENT_TYPES = ["game", "movie", "series"]
ENTERTAINMENT_STATUSES = ["backlog", "playing", "watching", "completed", "watched"]
ENTERTAINMENT_STATUS_BY_TYPE = {
    "game": ["backlog", "playing", "completed"],
    "movie": ["backlog", "watching", "watched"],
    "series": ["backlog", "watching", "watched"],
}
ACTIVE_ENTERTAINMENT_STATUSES = ["playing", "watching"]

PENDING_TODO_LIMIT = 5
TREND_WINDOW_DAYS = 7

# Columns a scoped query may filter or order on, per collection.
COLLECTION_COLUMNS = {
    PROFILES_TABLE: ["user_email", "username", "avatar_url", "created_at", "updated_at"],
    EXPENSES_TABLE: [
        "id",
        "user_email",
        "amount",
        "description",
        "category",
        "date",
        "created_at",
        "updated_at",
    ],
    TODOS_TABLE: [
        "id",
        "user_email",
        "title",
        "description",
        "completed",
        "due_date",
        "created_at",
        "updated_at",
    ],
    PROJECTS_TABLE: ["id", "user_email", "title", "description", "status", "created_at", "updated_at"],
    ENTERTAINMENT_TABLE: ["id", "user_email", "title", "type", "status", "created_at", "updated_at"],
}
