"""
Streamlit form UI for the off-grid solar sizer.
"""
