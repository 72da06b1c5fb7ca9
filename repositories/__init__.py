"""
repositories/ - Data Access Layer
==================================
Repositories own all SQL for their aggregate. They borrow connections from an
injected ConnectionProvider and return domain model objects.
"""
