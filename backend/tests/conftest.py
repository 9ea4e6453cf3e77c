"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real credentials or services
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_fake")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("AUTH_URL", "http://identity.test")
os.environ.setdefault("AUTH_API_KEY", "anon-test-key")
os.environ.setdefault("APP_URL", "http://app.test")
os.environ.setdefault("STARTER_CREDITS", "100")
