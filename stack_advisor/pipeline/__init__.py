"""
Advisory pipeline.

Modules
-------
advise : run_advisory() - recomputes all advice for one inventory snapshot.
"""
