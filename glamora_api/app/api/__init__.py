"""
API package.

``router`` groups every ``/api`` route; ``endpoints`` holds one module
per domain and ``deps`` the dependencies that wire services to them.
"""
