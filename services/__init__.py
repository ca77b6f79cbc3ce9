"""
services/ - Business Logic Layer
================================
Use cases called by the HTTP layer. Services talk to repositories and return
`Ok` / `Err` results instead of raising for expected failures.
"""
