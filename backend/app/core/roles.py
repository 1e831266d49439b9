ROLE_USER = "user"
ROLE_ADMIN = "admin"

ALL_ROLES = {ROLE_USER, ROLE_ADMIN}
