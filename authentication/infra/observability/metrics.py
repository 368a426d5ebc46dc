"""
Prometheus Metrics

Defines the Prometheus metrics for authentication monitoring.
Metrics are exposed at /api/metrics/ for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Failed login attempts counter.
Labels: reason (missing_fields, user_not_found, wrong_password, inactive)

Example:
    login_failed.labels(reason='wrong_password').inc()
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)

# ===== Signup Metrics =====

signup_total = Counter("auth_signup_total", "Total signup attempts", ["status"])

# ===== User Administration =====

user_admin_actions_total = Counter(
    "auth_user_admin_actions_total", "User administration actions performed by admins", ["action", "status"]
)
"""
Labels: action (create/update/delete), status (success/failed)
"""
