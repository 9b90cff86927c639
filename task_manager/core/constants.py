"""Core constants: task field bounds and paging limits.

Single source of truth shared by the validation layer, the ORM model and
the migrations.
"""

TASK_TITLE_MAX_LENGTH = 255
TASK_DESCRIPTION_MAX_LENGTH = 5000

# Listing
TASK_LIST_DEFAULT_LIMIT = 50
TASK_LIST_MAX_LIMIT = 100

# Postgres setting read by the task RLS policy (see migrations).
RLS_CURRENT_USER_SETTING = "app.current_user_id"
RLS_TASK_POLICY_NAME = "task_owner_isolation"
