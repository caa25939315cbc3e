import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jobportal.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
PASSWORD_RESET_TTL_HOURS = int(os.getenv("PASSWORD_RESET_TTL_HOURS", "24"))

# ✅ Email (Resend)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Job Portal <notifications@jobportal.com>")
EMAIL_FROM_NOREPLY = os.getenv("EMAIL_FROM_NOREPLY", "Job Portal <noreply@jobportal.com>")
NOTIFICATION_EMAIL = os.getenv("NOTIFICATION_EMAIL")

# ✅ Frontend
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ✅ Storage retries (single retry after a fixed delay)
STORAGE_RETRY_DELAY_SECONDS = float(os.getenv("STORAGE_RETRY_DELAY_SECONDS", "1.0"))
JOB_CREATE_RETRY_DELAY_SECONDS = float(os.getenv("JOB_CREATE_RETRY_DELAY_SECONDS", "2.0"))
