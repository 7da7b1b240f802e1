# src/models.py
# Registers every table on Base.metadata (used by Database.connect and alembic).
from auth.models import User, AdminActionLog  # noqa: F401
from preferences.models import UserSettings  # noqa: F401
from vpn.models import VpnLocation  # noqa: F401
from browse.models import BrowsingSession, Threat  # noqa: F401
from chat.models import ChatMessage  # noqa: F401
from payment.models import Payment  # noqa: F401
