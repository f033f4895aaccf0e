# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for a single concern:
#
#   auth_service:    registration and login for User
#   blog_service:    feed, post reading and post creation (category upsert)
#   comment_service: comments, replies and thread assembly
#   upload_service:  post image storage
#
# All database-backed functions accept an AsyncSession as their first
# argument so that the router layer controls the transaction boundary via
# the ``get_db`` dependency.
