from __future__ import annotations

# Philippine Standard Geographic Code mirror.
PSGC_BASE_URL = "https://psgc.gitlab.io/api"

# Albay. Every municipality/city lookup is scoped to this province.
PROVINCE_CODE = "050500000"

FOOD_TYPES = [
    "Filipino",
    "Korean",
    "Japanese",
    "Sea Food",
    "Fast Food",
    "Desserts",
    "Cafe",
    "Casual",
    "Buffet",
]

FOOD_TYPE_SEPARATOR = ", "

# Match against loaded regions, then once more after a reload.
REGION_MATCH_ATTEMPTS = 2

DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this restaurant?"

# Oldest toasts are dropped when nobody drains GET /toasts.
MAX_PENDING_TOASTS = 20
