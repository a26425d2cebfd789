"""
Common utilities package for the CyberMaker API.

Authentication helpers (password hashing, JWT, confirmation tokens), logging
and image processing. Import from the submodules directly: ``app.config``
depends on ``app.utils.logger``, so this package must not import anything
that reads settings.
"""
