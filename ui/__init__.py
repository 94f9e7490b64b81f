"""PantryLog Streamlit UI."""
