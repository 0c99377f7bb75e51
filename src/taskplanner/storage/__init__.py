"""
Persistence for the task collection.

Components:
- files.py: scoped reads and atomic writes
- csv_codec.py: ';'-delimited tabular format
- json_codec.py: JSON-like array format with a minimal object splitter
"""
