"""
Root conftest: puts the repository root on sys.path (pytest rootdir
insertion) so `snapline` imports without an installed copy.
"""
