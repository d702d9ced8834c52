"""
Test Suite for CareerPath

Test Structure:
    tests/
    ├── conftest.py           - Shared fixtures (in-memory SQLite engine per test)
    ├── test_hierarchy.py     - Hierarchy rules (pure functions)
    ├── test_tree.py          - Client tree builder and view state (pure)
    ├── test_taxonomy.py      - Taxonomy services and /api/filters, /api/admin/filters
    ├── test_post.py          - Post matching and /api/posts
    └── test_user.py          - User service and /api/user

Usage:
    # Run all tests
    pytest tests/ -v

Requirements:
    - pytest, pytest-asyncio, httpx, aiosqlite (pip install -e ".[test]")
"""
