"""
Streamlit dashboard.
"""
