"""
Calendar engine.

Components:
- grid.py: fixed 6x7 month grid + month navigation
- task_filter.py: status / search / time-window filter pipeline
- projection.py: clip tasks to a week and compute day offsets
- packing.py: first-fit row assignment for overlapping tasks
- view.py: the whole pipeline for one displayed month
"""
