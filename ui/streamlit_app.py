# Role: Streamlit chat UI, themed as a terminal.
# - Backend is authoritative (chat + snapshot); the UI only mirrors the session log.
# - One request in flight at a time: input is disabled while busy.

from __future__ import annotations

import html
import os
import uuid
from datetime import datetime
from typing import Any, Dict, List, MutableMapping, Optional

import requests
import streamlit as st

BACKEND_URL = os.getenv("SAVAGE_DEV_BACKEND_URL", "http://127.0.0.1:8000")

UNREACHABLE_REPLY = f"SEGFAULT: backend unreachable. Is the API running on {BACKEND_URL}?"


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "session_id" not in st.session_state:
        st.session_state["session_id"] = str(uuid.uuid4())
    if "messages" not in st.session_state:
        st.session_state["messages"] = []
    if "busy" not in st.session_state:
        st.session_state["busy"] = False
    if "pending" not in st.session_state:
        st.session_state["pending"] = None


def reset_session() -> None:
    old = st.session_state.get("session_id")
    if old:
        try:
            requests.delete(f"{BACKEND_URL}/sessions/{old}", timeout=10)
        except requests.RequestException:
            # The backend expires idle sessions on its own.
            pass
    st.session_state["session_id"] = str(uuid.uuid4())
    st.session_state["messages"] = []
    st.session_state["busy"] = False
    st.session_state["pending"] = None


# ----------------------------
# Backend calls
# ----------------------------
def send_to_backend(session_id: str, user_message: str) -> Dict[str, Any]:
    resp = requests.post(
        f"{BACKEND_URL}/chat",
        json={"session_id": session_id, "user_message": user_message},
        timeout=120,
    )
    resp.raise_for_status()
    return resp.json()


def fetch_snapshot(session_id: str) -> Optional[Dict[str, Any]]:
    try:
        r = requests.get(f"{BACKEND_URL}/state/{session_id}", timeout=10)
        if r.status_code != 200:
            return None
        return r.json()
    except requests.RequestException:
        return None


# ----------------------------
# UI polish
# ----------------------------
def inject_css() -> None:
    st.markdown(
        """
<style>
.stApp { background: #050505; }
.block-container { max-width: 960px; padding-top: 2rem; padding-bottom: 2rem; }

.sd-title { text-align: center; font-size: 3.5rem; font-weight: 900; letter-spacing: -0.05em; margin-bottom: 0; }
.sd-title span {
  background: linear-gradient(90deg, #6366f1, #a855f7, #ec4899);
  -webkit-background-clip: text;
  -webkit-text-fill-color: transparent;
}
.sd-sub {
  text-align: center; color: #6b7280; font-size: 0.7rem; font-weight: 900;
  text-transform: uppercase; letter-spacing: 0.4em; margin-bottom: 1.5rem;
}

/* Terminal window bar */
.sd-bar {
  display: flex; align-items: center; justify-content: space-between;
  background: #111; border: 1px solid rgba(255,255,255,0.05); border-radius: 16px 16px 0 0;
  padding: 10px 18px;
}
.sd-dots span { display: inline-block; width: 12px; height: 12px; border-radius: 50%; margin-right: 6px; }
.sd-host { font-family: monospace; font-size: 0.65rem; color: #6b7280; font-weight: 700; letter-spacing: 0.2em; text-transform: uppercase; }

/* Message bubbles */
.sd-row { display: flex; margin: 14px 0; }
.sd-row.user { justify-content: flex-end; }
.sd-row.assistant { justify-content: flex-start; }
.sd-msg {
  max-width: 85%; padding: 14px 16px; border-radius: 12px; font-family: monospace; font-size: 0.85rem;
  white-space: pre-wrap;
}
.sd-msg.user { background: rgba(79,70,229,0.10); border: 1px solid rgba(99,102,241,0.30); color: #e0e7ff; }
.sd-msg.assistant { background: rgba(255,255,255,0.05); border: 1px solid rgba(255,255,255,0.10); color: #d1d5db; }
.sd-meta { font-size: 0.55rem; text-transform: uppercase; font-weight: 900; opacity: 0.3; letter-spacing: 0.2em; margin-bottom: 8px; }

.sd-empty { text-align: center; opacity: 0.2; font-family: monospace; font-size: 0.75rem; letter-spacing: 0.2em; text-transform: uppercase; padding: 4rem 0; }
.sd-thinking { color: #6366f1; font-family: monospace; font-size: 0.65rem; font-weight: 900; text-transform: uppercase; }
.sd-status { text-align: center; margin-top: 1.5rem; font-size: 0.6rem; color: #374151; font-weight: 700; text-transform: uppercase; letter-spacing: 0.5em; }

div[data-testid="stChatInput"] textarea { font-family: monospace; min-height: 44px; }
</style>
""",
        unsafe_allow_html=True,
    )


# ----------------------------
# Formatting helpers
# ----------------------------
def _fmt_time(ts: Any) -> str:
    # Timestamps arrive as ISO strings from the backend; show them in local time.
    if isinstance(ts, str):
        try:
            ts = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        except ValueError:
            return ts
    if isinstance(ts, datetime):
        return ts.astimezone().strftime("%H:%M:%S")
    return ""


def _bubble(msg: Dict[str, Any]) -> str:
    role = "user" if msg.get("role") == "user" else "assistant"
    label = "GUEST_UID" if role == "user" else "CORE_AI"
    content = html.escape(msg.get("content") or "")
    return f"""
<div class="sd-row {role}">
  <div class="sd-msg {role}">
    <div class="sd-meta">{label} • {_fmt_time(msg.get("timestamp"))}</div>
    <div>{content}</div>
  </div>
</div>
"""


# ----------------------------
# Chat
# ----------------------------
def render_header() -> None:
    st.markdown('<div class="sd-title"><span>SAVAGE_DEV</span></div>', unsafe_allow_html=True)
    st.markdown('<div class="sd-sub">Fullstack Proficiency Only</div>', unsafe_allow_html=True)
    st.markdown(
        """
<div class="sd-bar">
  <div class="sd-dots"><span style="background:#ff5f56"></span><span style="background:#ffbd2e"></span><span style="background:#27c93f"></span></div>
  <div class="sd-host">root@savage-terminal: ~</div>
  <div style="width:40px"></div>
</div>
""",
        unsafe_allow_html=True,
    )


def render_chat(messages: List[Dict[str, Any]], pending: Optional[str] = None) -> None:
    if not messages and not pending:
        st.markdown('<div class="sd-empty">Awaiting valid syntax...</div>', unsafe_allow_html=True)
        return
    if messages:
        st.markdown("".join(_bubble(m) for m in messages), unsafe_allow_html=True)
    if pending:
        # Echo the queued user message until the backend returns the real one.
        st.markdown(_bubble({"role": "user", "content": pending, "timestamp": datetime.now()}), unsafe_allow_html=True)
        st.markdown('<div class="sd-thinking">● Thinking...</div>', unsafe_allow_html=True)


def render_sidebar() -> None:
    st.sidebar.title("Session")
    st.sidebar.code(st.session_state["session_id"], language=None)
    if st.sidebar.button("New session", use_container_width=True, disabled=st.session_state["busy"]):
        reset_session()
        st.rerun()


# ----------------------------
# Submission (two runs per turn)
# ----------------------------
def queue_submission(state: MutableMapping[str, Any], user_input: Optional[str]) -> bool:
    # Run 1: stash the text and flip busy, then rerun so the input renders disabled.
    if state.get("busy") or not user_input or not user_input.strip():
        return False
    state["pending"] = user_input.strip()
    state["busy"] = True
    return True


def run_pending_turn(state: MutableMapping[str, Any]) -> None:
    # Run 2: the input is already disabled; make the one backend call, then release busy.
    user_text = state.get("pending")
    if not user_text:
        state["busy"] = False
        return

    try:
        result = send_to_backend(state["session_id"], user_text)

        if result.get("accepted"):
            state["messages"].append(result["user_message"])
            state["messages"].append(result["assistant_message"])
        else:
            # Backend refused (already busy); resync with its log instead of guessing.
            snap = fetch_snapshot(state["session_id"])
            if snap:
                state["messages"] = snap["messages"]

    except requests.RequestException:
        state["messages"].append({"role": "user", "content": user_text, "timestamp": datetime.now()})
        state["messages"].append({"role": "assistant", "content": UNREACHABLE_REPLY, "timestamp": datetime.now()})
    finally:
        state["pending"] = None
        state["busy"] = False


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="SAVAGE_DEV", page_icon="💀", layout="centered")
    inject_css()

    ensure_session()
    render_header()
    render_sidebar()
    render_chat(st.session_state["messages"], st.session_state["pending"])

    user_input = st.chat_input("Query fullstack concepts...", disabled=st.session_state["busy"])

    if st.session_state["busy"]:
        run_pending_turn(st.session_state)
        st.rerun()

    if queue_submission(st.session_state, user_input):
        st.rerun()

    st.markdown('<div class="sd-status">Status: Connection Stable</div>', unsafe_allow_html=True)


if __name__ == "__main__":
    main()
