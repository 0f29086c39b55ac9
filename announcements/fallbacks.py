# NOTE:
# - Shown on the public site only when the database has nothing to offer
#   (empty table) or cannot be reached. Keep them short and evergreen.
# - Program rows mirror the Program model's public shape (name, timing, icon).
# - Board rows carry a display order so the fallback sorts like real data.

FALLBACK_PROGRAMS = [
    {
        "name": "Weekly Study Circle",
        "timing": "Daily after evening prayer",
        "icon": "fas fa-sun",
    },
    {
        "name": "Community Reflection Night",
        "timing": "Thursdays after evening prayer",
        "icon": "fas fa-calendar-week",
    },
    {
        "name": "Family Night",
        "timing": "3rd Saturday Monthly",
        "icon": "fas fa-users",
    },
]

FALLBACK_BOARD = [
    {"name": "Board Chair", "order": 1},
    {"name": "Vice Chair", "order": 2},
    {"name": "Treasurer", "order": 3},
    {"name": "Secretary", "order": 4},
    {"name": "Member at Large", "order": 5},
]
