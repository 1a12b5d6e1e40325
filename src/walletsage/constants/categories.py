"""
Default categories seeded on first start.
Colors and icon names are shared with the presentation layer.
"""

from ..domain.repositories.category import CategoryInfo

# Income
INCOME_CATEGORIES = [
    {"name": "Salary", "kind": "income", "color": "#10B981", "icon": "Briefcase", "description": "Monthly salary"},
    {"name": "Freelance", "kind": "income", "color": "#3B82F6", "icon": "Laptop", "description": "Freelance work"},
    {"name": "Investments", "kind": "income", "color": "#8B5CF6", "icon": "TrendingUp", "description": "Investment returns"},
    {"name": "Sales", "kind": "income", "color": "#F59E0B", "icon": "ShoppingBag", "description": "Product sales"},
]

# Expenses
EXPENSE_CATEGORIES = [
    {"name": "Food", "kind": "expense", "color": "#EF4444", "icon": "UtensilsCrossed", "description": "Groceries and dining"},
    {"name": "Transport", "kind": "expense", "color": "#F97316", "icon": "Car", "description": "Transport and fuel"},
    {"name": "Housing", "kind": "expense", "color": "#84CC16", "icon": "Home", "description": "Rent and household bills"},
    {"name": "Health", "kind": "expense", "color": "#06B6D4", "icon": "Heart", "description": "Medical and pharmacy"},
    {"name": "Education", "kind": "expense", "color": "#8B5CF6", "icon": "GraduationCap", "description": "Courses and books"},
    {"name": "Entertainment", "kind": "expense", "color": "#EC4899", "icon": "Gamepad2", "description": None},
    {"name": "Shopping", "kind": "expense", "color": "#F59E0B", "icon": "ShoppingCart", "description": None},
    {"name": "Other", "kind": "expense", "color": "#6B7280", "icon": "MoreHorizontal", "description": None},
]

DEFAULT_CATEGORIES = INCOME_CATEGORIES + EXPENSE_CATEGORIES

FALLBACK_CATEGORY = CategoryInfo(name="Uncategorized", color="#6B7280", icon="Tag")
