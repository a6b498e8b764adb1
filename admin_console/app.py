"""Streamlit admin console for the travel booking platform."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, MutableMapping, Optional

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder

from admin_console.admin_client import AdminAPIError, AdminClient
from admin_console.config import get_console_settings
from admin_console.dashboard import ActivityFeed, DashboardAggregator
from admin_console.exports import export_resource
from admin_console.forms import FormBuffer, submit_form
from admin_console.help_center import TICKET_CATEGORIES, TICKET_PRIORITIES, HelpCenterClient
from admin_console.listing import ListController, ListState
from admin_console.reports import GROUP_BY, PERIODS, fetch_analytics, fetch_report
from admin_console.resources import (
    ACCOMMODATIONS,
    ALL,
    BOOKING_STATUSES,
    BOOKINGS,
    TOURS,
    TRANSPORTATION,
    USERS,
    ResourceSpec,
)
from admin_console.settings_store import KNOWN_SETTINGS, SettingsStore


def get_admin_client() -> AdminClient:
    """Build a client from the sidebar connection settings."""
    return AdminClient(
        base_url=st.session_state["api_url"],
        token=st.session_state.get("token") or None,
    )


def _session_object(key: str, factory: Any) -> Any:
    """Return a per-session object, rebuilt when the connection changes."""
    connection = (st.session_state["api_url"], st.session_state.get("token"))
    cached = st.session_state.get(key)
    if cached is None or cached[0] != connection:
        cached = (connection, factory(get_admin_client()))
        st.session_state[key] = cached
    return cached[1]


def get_controller(spec: ResourceSpec) -> ListController:
    return _session_object(f"controller_{spec.key}", lambda client: ListController(client, spec))


def render_table(data: List[Dict[str, Any]], height: int = 300) -> None:
    """Render a list of dictionaries using AgGrid."""
    if not data:
        st.info("No records to display.")
        return
    df = pd.json_normalize(data)
    builder = GridOptionsBuilder.from_dataframe(df)
    builder.configure_default_column(
        resizable=True, sortable=True, filter=True, wrapText=True, autoHeight=True
    )
    AgGrid(df, gridOptions=builder.build(), height=height, theme="streamlit")


def require_token() -> bool:
    if not st.session_state.get("token"):
        st.warning("Enter an admin token in the sidebar to load data.")
        return False
    return True


# --- Resource screens ---


def reset_filter_widgets(controller: ListController, state: MutableMapping[str, Any]) -> bool:
    """Reset button callback: drop the widget values and the query together."""
    for key in controller.spec.filter_widget_keys():
        state.pop(key, None)
    return controller.reset_filters()


def render_filters(controller: ListController) -> None:
    spec = controller.spec
    query = controller.query
    columns = st.columns(len(spec.filters) + 2)
    search = columns[0].text_input("Search", value=query.search, key=spec.search_widget_key())
    if search != query.search:
        controller.set_search(search)
    for column, filter_spec in zip(columns[1:], spec.filters):
        current = query.filters.get(filter_spec.name, ALL)
        if filter_spec.options:
            options = (ALL,) + filter_spec.options
            value = column.selectbox(
                filter_spec.label,
                options,
                index=options.index(current) if current in options else 0,
                key=spec.filter_widget_key(filter_spec.name),
            )
        else:
            value = column.text_input(filter_spec.label, value=current if current != ALL else "", key=spec.filter_widget_key(filter_spec.name))
        if value != current and not (value == "" and current == ALL):
            controller.set_filter(filter_spec.name, value)
    columns[-1].button(
        "Reset",
        key=f"{spec.key}_reset",
        on_click=reset_filter_widgets,
        args=(controller, st.session_state),
    )


def render_pagination(controller: ListController) -> None:
    page = controller.page
    col1, col2, col3 = st.columns([1, 2, 1])
    if col1.button("Previous", key=f"{controller.spec.key}_prev", disabled=controller.current_page <= 1):
        controller.previous_page()
    col2.caption(
        f"Page {controller.current_page} of {max(page.total_pages, 1)} · {page.total_items} total"
    )
    if col3.button(
        "Next",
        key=f"{controller.spec.key}_next",
        disabled=controller.current_page >= page.total_pages,
    ):
        controller.next_page()


def render_export(controller: ListController) -> None:
    settings = get_console_settings()
    if st.button("Prepare CSV export", key=f"{controller.spec.key}_export"):
        try:
            export = export_resource(
                controller.client, controller.spec, controller.query, limit=settings.export_limit
            )
            st.session_state[f"{controller.spec.key}_export_file"] = export
        except AdminAPIError as err:
            st.error(f"Failed to export data: {err.message}")
    export = st.session_state.get(f"{controller.spec.key}_export_file")
    if export is not None:
        st.download_button(
            f"Download {export.filename} ({export.row_count} rows)",
            data=export.content,
            file_name=export.filename,
            mime=export.mime_type,
            key=f"{controller.spec.key}_download",
        )


def location_options(client: AdminClient) -> Dict[str, str]:
    cached = st.session_state.get("locations")
    if cached is None:
        try:
            locations = client.get("/admin/locations")["data"]["locations"]
        except AdminAPIError as err:
            st.error(f"Failed to load locations: {err.message}")
            return {}
        cached = {location["id"]: f"{location['name']} ({location['city']})" for location in locations}
        st.session_state["locations"] = cached
    return cached


def render_form(controller: ListController, buffer: FormBuffer, action: str, record_id: Optional[str] = None) -> None:
    spec = controller.spec
    form_key = f"{spec.key}_{action}_form"
    locations = location_options(controller.client) if any(f.name == "locationId" for f in buffer.fields) else {}
    with st.form(form_key):
        for field_spec in buffer.fields:
            widget_key = f"{form_key}_{field_spec.name}"
            current = buffer.values.get(field_spec.name, field_spec.default)
            if field_spec.name == "locationId":
                options = [""] + list(locations)
                buffer.set(
                    field_spec.name,
                    st.selectbox(
                        field_spec.label,
                        options,
                        index=options.index(current) if current in options else 0,
                        format_func=lambda key: locations.get(key, "Select a location"),
                        key=widget_key,
                    ),
                )
            elif field_spec.kind == "select":
                options = list(field_spec.options)
                buffer.set(
                    field_spec.name,
                    st.selectbox(
                        field_spec.label,
                        options,
                        index=options.index(current) if current in options else 0,
                        key=widget_key,
                    ),
                )
            else:
                buffer.set(field_spec.name, st.text_input(field_spec.label, value=str(current or ""), key=widget_key))
        submitted = st.form_submit_button("Save" if action == "update" else "Create")
    if submitted:
        if submit_form(controller, buffer, action=action, record_id=record_id):
            st.success(f"{spec.label} saved.")
        else:
            st.error(buffer.error)


def render_toggles(controller: ListController) -> None:
    spec = controller.spec
    records = {record["id"]: record for record in controller.page.items}
    if not records:
        return
    with st.expander("Update status"):
        record_id = st.selectbox("Record", list(records), key=f"{spec.key}_toggle_record")
        record = records[record_id]
        flag = st.selectbox("Field", list(spec.flag_paths), key=f"{spec.key}_toggle_field")
        if flag == "status":
            value: Any = st.selectbox("New status", BOOKING_STATUSES, key=f"{spec.key}_toggle_status")
        elif flag == "role":
            value = st.selectbox("New role", ("USER", "PROVIDER", "ADMIN"), key=f"{spec.key}_toggle_role")
        else:
            value = not record.get(flag)
            st.caption(f"{flag} is currently {record.get(flag)}; applying will set it to {value}.")
        if st.button("Apply", key=f"{spec.key}_toggle_apply"):
            error = controller.set_flag(record_id, flag, value)
            if error:
                st.error(error)
            else:
                st.success("Updated.")


def render_delete(controller: ListController) -> None:
    ids = [record["id"] for record in controller.page.items]
    if not ids:
        return
    with st.expander(f"Delete {controller.spec.label.lower()}"):
        record_id = st.selectbox("Record", ids, key=f"{controller.spec.key}_delete_record")
        if st.button("Delete", key=f"{controller.spec.key}_delete"):
            error = controller.delete(record_id)
            if error:
                st.error(error)
            else:
                st.success("Deleted.")


def resource_tab(spec: ResourceSpec) -> None:
    """Filtered list, pagination, export, toggles and forms for one resource."""
    st.subheader(spec.label)
    if not require_token():
        return
    controller = get_controller(spec)
    if controller.state is ListState.IDLE:
        controller.refresh()

    render_filters(controller)
    if controller.error:
        st.error(controller.error)
    if controller.is_empty:
        st.info(spec.empty_message)
    else:
        render_table(list(controller.page.items), height=420)
    render_pagination(controller)
    render_export(controller)
    render_toggles(controller)

    if spec.form_fields:
        with st.expander(f"Create {spec.label.lower()}"):
            render_form(controller, _session_buffer(spec, "create"), "create")
    if spec.supports_update and controller.page.items:
        with st.expander(f"Edit {spec.label.lower()}"):
            records = {record["id"]: record for record in controller.page.items}
            record_id = st.selectbox("Record", list(records), key=f"{spec.key}_edit_record")
            buffer = _session_buffer(spec, "update")
            if st.session_state.get(f"{spec.key}_editing") != record_id:
                buffer.open(records[record_id])
                st.session_state[f"{spec.key}_editing"] = record_id
            render_form(controller, buffer, "update", record_id=record_id)
    if spec.supports_delete:
        render_delete(controller)


def _session_buffer(spec: ResourceSpec, action: str) -> FormBuffer:
    key = f"{spec.key}_{action}_buffer"
    if key not in st.session_state:
        st.session_state[key] = FormBuffer(spec.form_fields)
    return st.session_state[key]


# --- Dashboard ---


def get_dashboard() -> DashboardAggregator:
    interval = get_console_settings().poll_seconds
    return _session_object(
        "dashboard",
        lambda client: DashboardAggregator(client, ActivityFeed(client, interval=interval)),
    )


@st.fragment(run_every=timedelta(seconds=get_console_settings().poll_seconds))
def activity_feed_fragment() -> None:
    feed = get_dashboard().feed
    feed.poll()
    if feed.error:
        st.error(feed.error)
    render_table(
        [
            {
                "time": entry.get("timestamp"),
                "priority": entry["priority"],
                "type": entry.get("type"),
                "message": entry.get("message"),
            }
            for entry in feed.items
        ],
        height=300,
    )
    col1, col2, col3 = st.columns([1, 2, 1])
    if col1.button("Previous", key="activity_prev", disabled=feed.page <= 1):
        feed.go_to_page(feed.page - 1)
    col2.caption(f"Page {feed.page} of {feed.total_pages} · {feed.total} events")
    if col3.button("Next", key="activity_next", disabled=feed.page >= feed.total_pages):
        feed.go_to_page(feed.page + 1)


def dashboard_tab() -> None:
    """Render dashboard overview."""
    st.subheader("Overview")
    if not require_token():
        return
    dashboard = get_dashboard()
    if st.button("Refresh dashboard") or "dashboard_loaded" not in st.session_state:
        dashboard.load()
        dashboard.load_pending()
        st.session_state["dashboard_loaded"] = True
    if dashboard.error:
        st.error(dashboard.error)

    stats = dashboard.stats
    cols = st.columns(4)
    cols[0].metric("Users", stats["totalUsers"])
    cols[1].metric("Bookings", stats["totalBookings"])
    cols[2].metric("Revenue", f"{stats['totalRevenue']:,.0f}")
    cols[3].metric("Pending bookings", stats["pendingBookings"])
    cols = st.columns(4)
    cols[0].metric("Accommodations", stats["totalAccommodations"])
    cols[1].metric("Transportation", stats["totalTransportation"])
    cols[2].metric("Tours", stats["totalTours"])
    cols[3].metric(
        "Awaiting verification",
        stats["unverifiedAccommodations"] + stats["unverifiedTransportation"],
    )

    export = dashboard.export_kpis()
    st.download_button(
        "Download KPI report",
        data=export.content,
        file_name=export.filename,
        mime=export.mime_type,
    )

    st.subheader("Recent bookings")
    render_table(list(dashboard.recent_bookings), height=220)
    if dashboard.pending:
        with st.expander("Pending review"):
            for key, label in (
                ("pendingBookings", "Pending bookings"),
                ("unverifiedAccommodations", "Unverified accommodations"),
                ("unverifiedTransportation", "Unverified transportation"),
            ):
                st.markdown(f"**{label}**")
                render_table(dashboard.pending.get(key) or [], height=180)

    st.subheader("Activity")
    activity_feed_fragment()


# --- Reports, analytics, settings, help ---


def reports_tab() -> None:
    st.subheader("Reports")
    if not require_token():
        return
    with st.form("report_form"):
        report_type = st.selectbox("Report", ("revenue", "bookings", "activity"))
        col1, col2, col3 = st.columns(3)
        start = col1.date_input("Start date", value=date.today() - timedelta(days=30))
        end = col2.date_input("End date", value=date.today())
        group_by = col3.selectbox("Group by", GROUP_BY)
        run = st.form_submit_button("Generate report")
    if run:
        try:
            st.session_state["report"] = fetch_report(
                get_admin_client(), report_type, start.isoformat(), end.isoformat(), group_by
            )
        except AdminAPIError as err:
            st.error(f"Failed to generate report: {err.message}")
    report = st.session_state.get("report")
    if report is None:
        return
    st.json(report.summary)
    if report.rows:
        frame = pd.DataFrame(report.rows).set_index("date")
        st.line_chart(frame)
    render_table(report.rows, height=300)
    export = report.to_csv()
    st.download_button("Download CSV", data=export.content, file_name=export.filename, mime=export.mime_type)


def analytics_tab() -> None:
    st.subheader("Analytics")
    if not require_token():
        return
    period = st.radio("Period", PERIODS, index=1, horizontal=True)
    try:
        data = fetch_analytics(get_admin_client(), period)
    except AdminAPIError as err:
        st.error(f"Failed to load analytics: {err.message}")
        return
    metrics = data.get("metrics") or {}
    cols = st.columns(3)
    cols[0].metric("Conversion rate", f"{metrics.get('conversionRate', 0)}%")
    cols[1].metric("Average booking value", f"{metrics.get('averageBookingValue', 0):,.0f}")
    cols[2].metric("Top service", metrics.get("topService") or "N/A")
    trend = pd.DataFrame(data["bookings"]["trend"]).set_index("label")
    trend["revenue"] = [point["revenue"] for point in data["revenue"]["trend"]]
    st.line_chart(trend)
    split = data["services"]["split"]
    if split:
        st.bar_chart(pd.DataFrame(split).set_index("name"))
    st.area_chart(pd.DataFrame(data["users"]["growth"]).set_index("label"))


def settings_tab() -> None:
    """Connection details plus the platform's key/value settings."""
    st.subheader("Platform settings")
    if not require_token():
        return
    store: SettingsStore = _session_object("settings_store", SettingsStore)
    if "settings_loaded" not in st.session_state:
        store.load()
        st.session_state["settings_loaded"] = True
    if store.error:
        st.error(store.error)
    with st.form("settings_form"):
        form: Dict[str, Any] = {}
        for setting in KNOWN_SETTINGS:
            current = store.form.get(setting.key, setting.default)
            if setting.is_bool:
                form[setting.key] = st.checkbox(setting.description, value=bool(current))
            else:
                form[setting.key] = st.text_input(
                    setting.description,
                    value=str(current),
                    type="password" if "secret" in setting.key or "token" in setting.key else "default",
                )
        saved = st.form_submit_button("Save settings")
    if saved:
        if store.save(form):
            st.success("Settings saved.")
        else:
            st.error(store.error)


def help_tab() -> None:
    st.subheader("Help center")
    if not require_token():
        return
    help_client = HelpCenterClient(get_admin_client())
    try:
        categories = help_client.categories()
    except AdminAPIError as err:
        st.error(f"Failed to load help content: {err.message}")
        return
    names = {category["id"]: category["name"] for category in categories}
    col1, col2 = st.columns(2)
    category = col1.selectbox("Category", [ALL] + list(names), format_func=lambda key: names.get(key, "All"))
    search = col2.text_input("Search articles")
    try:
        articles = help_client.articles(category=category, search=search)
    except AdminAPIError as err:
        st.error(f"Failed to load articles: {err.message}")
        articles = []
    for article in articles:
        with st.expander(article["title"]):
            st.markdown(article["content"])
            st.caption(", ".join(article.get("tags") or []))

    st.markdown("**Support tickets**")
    col1, col2 = st.columns(2)
    ticket_status = col1.selectbox("Status", (ALL, "OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"))
    ticket_priority = col2.selectbox("Priority", (ALL,) + TICKET_PRIORITIES)
    try:
        tickets = help_client.tickets(status=ticket_status, priority=ticket_priority)
        render_table(tickets.get("tickets") or [], height=220)
    except AdminAPIError as err:
        st.error(f"Failed to load tickets: {err.message}")

    with st.form("ticket_form"):
        subject = st.text_input("Subject")
        description = st.text_area("Description")
        col1, col2 = st.columns(2)
        priority = col1.selectbox("Priority", TICKET_PRIORITIES, index=1)
        ticket_category = col2.selectbox("Category", TICKET_CATEGORIES)
        submit = st.form_submit_button("Submit ticket")
    if submit:
        try:
            help_client.submit_ticket(subject, description, priority, ticket_category)
            st.success("Ticket submitted.")
        except AdminAPIError as err:
            st.error(f"Failed to submit ticket: {err.message}")

    if st.button("Run diagnostics"):
        try:
            st.json(help_client.diagnostics())
        except AdminAPIError as err:
            st.error(f"Diagnostics failed: {err.message}")


def render_sidebar() -> None:
    settings = get_console_settings()
    st.sidebar.header("Connection")
    api_url = st.sidebar.text_input("API base URL", value=st.session_state.get("api_url", settings.api_url))
    token = st.sidebar.text_input("Admin token", value=st.session_state.get("token") or settings.token or "", type="password")
    st.session_state["api_url"] = api_url.rstrip("/")
    st.session_state["token"] = token
    st.sidebar.caption("Start the mock API with `uvicorn admin_backend.app.main:app --reload`.")


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title="Travel Admin", layout="wide")
    render_sidebar()

    tabs = st.tabs(
        [
            "Dashboard",
            "Users",
            "Bookings",
            "Accommodations",
            "Transportation",
            "Tours",
            "Reports",
            "Analytics",
            "Settings",
            "Help",
        ]
    )
    with tabs[0]:
        dashboard_tab()
    for tab, spec in zip(tabs[1:6], (USERS, BOOKINGS, ACCOMMODATIONS, TRANSPORTATION, TOURS)):
        with tab:
            resource_tab(spec)
    with tabs[6]:
        reports_tab()
    with tabs[7]:
        analytics_tab()
    with tabs[8]:
        settings_tab()
    with tabs[9]:
        help_tab()


if __name__ == "__main__":
    main()
