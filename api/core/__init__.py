"""
Core utilities shared across the person directory API.

Configuration (env vars), logging setup and concurrency primitives live here
so routers and repositories do not read os.environ or configure handlers
themselves.
"""
