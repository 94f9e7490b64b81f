"""
PantryLog Streamlit Application

Thin client: sends transcribed commands to the API and shows the inventory.

Run with: streamlit run ui/app.py
"""

import streamlit as st

from ui.api_client import get_client
from ui.config import get_settings

settings = get_settings()


def display_name(name: str) -> str:
    """Upper-case the first letter, leave the rest as recorded."""
    return name[:1].upper() + name[1:]


def render_command_box():
    """Command input and result message."""
    st.subheader("Command")

    command = st.text_input(
        "What changed?",
        placeholder="Say something like 'add two apples'...",
        key="command",
    )

    if st.button("Run", type="primary", disabled=not command):
        with st.spinner("Processing..."):
            result = get_client().send_command(command)

        if result.success:
            st.session_state["message"] = ("success", result.data.get("message", "Done."))
        else:
            st.session_state["message"] = ("error", f"Error: {result.error}")

    if "message" in st.session_state:
        kind, text = st.session_state["message"]
        if kind == "success":
            st.success(text)
        else:
            st.error(text)


def render_inventory():
    """Current inventory list."""
    st.subheader("Inventory")

    result = get_client().get_snapshot()
    if not result.success:
        st.error(f"Cannot load inventory: {result.error}")
        return

    items = result.data.get("items", [])
    if not items:
        st.info("The inventory is empty.")
    else:
        for item in items:
            col_name, col_qty = st.columns([3, 1])
            col_name.markdown(f"**{display_name(item['name'])}**")
            col_qty.markdown(f"{item['quantity']:g} {item['unit']}")

    conflicts = result.data.get("conflicts", [])
    if conflicts:
        with st.expander(f"Unit conflicts ({len(conflicts)})"):
            for c in conflicts:
                st.warning(
                    f"{c['item_name']}: {c['incoming_quantity']:g} {c['incoming_unit']} "
                    f"not added, stock is kept in {c['current_unit']}"
                )


def main():
    """Main application entry point."""
    st.set_page_config(page_title=settings.page_title, layout="centered")
    st.title(settings.page_title)

    if not get_client().health_check().success:
        st.error("Cannot connect to the PantryLog API.")
        st.info(
            f"Expected API URL: {settings.api_base_url}\n\n"
            "Start the API with: `uvicorn api.main:app --reload`"
        )
        return

    render_command_box()
    st.divider()
    render_inventory()


if __name__ == "__main__":
    main()
