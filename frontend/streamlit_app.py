import os
from datetime import date

import streamlit as st

from taskboard.client import ApiError, TaskboardClient

API_URL = os.getenv("TASKBOARD_API_URL", "http://localhost:8000")

STATUSES = ["todo", "in-progress", "completed"]
PRIORITIES = ["low", "medium", "high"]
STATUS_LABELS = {"todo": "To Do", "in-progress": "In Progress", "completed": "Completed"}

# The API client (and with it the token) lives in this browser session only
if "client" not in st.session_state:
    st.session_state.client = TaskboardClient(API_URL)
if "menu" not in st.session_state:
    st.session_state.menu = "Login"


# -----------------------------
# Pages
# -----------------------------
def login_page(client: TaskboardClient):
    st.header("Login")
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")
    if submitted:
        try:
            user = client.login(email, password)
        except ApiError as exc:
            st.error(f"Login failed: {exc.message}")
        else:
            st.session_state.flash = f"Welcome back, {user['name']}!"
            st.session_state.menu = "Tasks"
            st.rerun()


def register_page(client: TaskboardClient):
    st.header("Register")
    with st.form("register_form"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Create account")
    if submitted:
        try:
            user = client.register(name, email, password)
        except ApiError as exc:
            st.error(f"Registration failed: {exc.message}")
        else:
            st.session_state.flash = f"Account created for {user['email']}"
            st.session_state.menu = "Tasks"
            st.rerun()


def profile_page(client: TaskboardClient):
    st.header("Profile")
    try:
        user = client.get_profile()
    except ApiError as exc:
        st.error(exc.message)
        return
    st.write("Email:", user["email"])
    st.write("Member since:", user["createdAt"])
    with st.form("profile_form"):
        name = st.text_input("Name", value=user["name"])
        bio = st.text_area("Bio", value=user.get("bio") or "")
        avatar = st.text_input("Avatar URL", value=user.get("avatar") or "")
        submitted = st.form_submit_button("Save")
    if submitted:
        try:
            client.update_profile(name=name, bio=bio, avatar=avatar)
        except ApiError as exc:
            st.error(exc.message)
        else:
            st.success("Profile updated!")


def task_form(key: str, task=None):
    """Render the create/edit form; return the payload when submitted."""
    task = task or {}
    with st.form(key):
        title = st.text_input("Title", value=task.get("title", ""))
        description = st.text_area("Description", value=task.get("description") or "")
        status = st.selectbox(
            "Status", STATUSES, index=STATUSES.index(task.get("status", "todo")), format_func=STATUS_LABELS.get
        )
        priority = st.selectbox("Priority", PRIORITIES, index=PRIORITIES.index(task.get("priority", "medium")))
        has_due = st.checkbox("Has due date", value=bool(task.get("dueDate")))
        due = st.date_input("Due date", value=date.fromisoformat(task["dueDate"]) if task.get("dueDate") else date.today())
        submitted = st.form_submit_button("Save task")
    if not submitted:
        return None
    return {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "dueDate": due.isoformat() if has_due else None,
    }


def tasks_page(client: TaskboardClient):
    st.header("Your tasks")
    col1, col2, col3 = st.columns(3)
    with col1:
        search = st.text_input("Search")
    with col2:
        status = st.selectbox("Status", [""] + STATUSES, format_func=lambda s: STATUS_LABELS.get(s, "All"))
    with col3:
        priority = st.selectbox("Priority", [""] + PRIORITIES, format_func=lambda p: p or "All")

    try:
        tasks = client.list_tasks(status=status or None, priority=priority or None, search=search or None)
    except ApiError as exc:
        st.error(f"Could not load tasks: {exc.message}")
        return

    if not tasks:
        st.info("No tasks found.")
        return

    st.caption(f"{len(tasks)} task(s)")
    for task in tasks:
        st.subheader(task["title"])
        if task.get("description"):
            st.write(task["description"])
        st.write(f"{STATUS_LABELS[task['status']]} · priority {task['priority']}")
        if task.get("dueDate"):
            st.write("Due:", task["dueDate"])

        col_del, col_upd = st.columns([1, 2])
        with col_del:
            if st.button("Delete", key=f"delete_{task['id']}"):
                try:
                    client.delete_task(task["id"])
                except ApiError as exc:
                    st.error(exc.message)
                else:
                    st.rerun()
        with col_upd:
            with st.expander("Edit"):
                payload = task_form(f"update_form_{task['id']}", task)
                if payload:
                    try:
                        client.update_task(task["id"], **payload)
                    except ApiError as exc:
                        st.error(exc.message)
                    else:
                        st.rerun()
        st.write("---")


def create_task_page(client: TaskboardClient):
    st.header("New task")
    payload = task_form("create_task_form")
    if payload:
        try:
            task = client.create_task(**payload)
        except ApiError as exc:
            st.error(exc.message)
        else:
            st.success(f"Created \"{task['title']}\"")


# -----------------------------
# Layout
# -----------------------------
client = st.session_state.client

st.sidebar.title("Menu")
if client.is_authenticated:
    st.sidebar.write(f"Signed in as {client.user['name']}")
    for item in ("Tasks", "New task", "Profile"):
        if st.sidebar.button(item):
            st.session_state.menu = item
    if st.sidebar.button("Logout"):
        client.logout()
        st.session_state.menu = "Login"
else:
    for item in ("Login", "Register"):
        if st.sidebar.button(item):
            st.session_state.menu = item

st.title("Taskboard")
if "flash" in st.session_state:
    st.success(st.session_state.pop("flash"))

PAGES = {
    "Login": login_page,
    "Register": register_page,
    "Tasks": tasks_page,
    "New task": create_task_page,
    "Profile": profile_page,
}
PUBLIC = {"Login", "Register"}

menu = st.session_state.menu
if menu not in PUBLIC and not client.is_authenticated:
    st.warning("Please log in first.")
    login_page(client)
else:
    PAGES[menu](client)
