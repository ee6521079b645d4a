"""
Session transcript recording for the WOPR server.

This module records what happened in a session (connection events, the
input received and the screens visited) so a session can be reviewed later
with the replay TUI. Transcripts are an audit trail only; sessions are never
resumed from them.
"""

import json
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .screens import Screen


TRANSCRIPT_FORMAT = "WOPR transcript v1"


class SessionRecorder:
    """
    Records the interactions of one WOPR session.
    """

    def __init__(self, session_id: Optional[str] = None, peer: Optional[str] = None):
        self.session_id = session_id or self._generate_session_id()
        self.peer = peer
        self.interactions: List[Dict[str, Any]] = []
        self.start_time = time.time()

    def _generate_session_id(self) -> str:
        """Generate a unique session ID from the timestamp and a random suffix."""
        return f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    def _stamp(self) -> Dict[str, Any]:
        now = time.time()
        return {"timestamp": now, "relative_time": now - self.start_time}

    def record_input(self, raw: str, token: str, screen: Screen) -> None:
        """
        Record input received from the client.

        Args:
            raw: Input as received
            token: Normalized token
            screen: Screen the input arrived at
        """
        interaction = self._stamp()
        interaction.update({
            "type": "input",
            "direction": "client -> wopr",
            "screen": screen.name,
            "raw": raw,
            "token": token,
        })
        self.interactions.append(interaction)

    def record_screen(self, previous: Screen, screen: Screen, description: str = "") -> None:
        """
        Record a move between screens.

        Args:
            previous: Screen the session left
            screen: Screen the session entered
            description: Optional description of the move
        """
        interaction = self._stamp()
        interaction.update({
            "type": "screen",
            "direction": "wopr -> client",
            "from_screen": previous.name,
            "screen": screen.name,
            "description": description,
        })
        self.interactions.append(interaction)

    def record_event(self, event_type: str, description: str, details: Dict[str, Any] = None) -> None:
        """
        Record a general event (connection, rejection, disconnection, error).

        Args:
            event_type: Type of event
            description: Description of the event
            details: Additional event details
        """
        interaction = self._stamp()
        interaction.update({
            "type": "event",
            "event_type": event_type,
            "description": description,
            "details": details or {},
        })
        self.interactions.append(interaction)

    def save_session(self, output_dir: str = "sessions") -> str:
        """
        Save the transcript to a JSON file.

        Args:
            output_dir: Directory to save transcripts in

        Returns:
            str: Path to the saved transcript
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        session_data = {
            "session_id": self.session_id,
            "peer": self.peer,
            "start_time": self.start_time,
            "end_time": time.time(),
            "duration": time.time() - self.start_time,
            "total_interactions": len(self.interactions),
            "metadata": {
                "format": TRANSCRIPT_FORMAT,
                "server_version": "1.0.0",
                "recorded_at": datetime.now().isoformat(),
            },
            "interactions": self.interactions,
        }

        filepath = output_path / f"{self.session_id}.json"
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(session_data, f, indent=2, ensure_ascii=False)

        return str(filepath)

    def get_session_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current session.

        Returns:
            Dict containing session statistics
        """
        inputs = [i for i in self.interactions if i.get("type") == "input"]
        screens = [i for i in self.interactions if i.get("type") == "screen"]
        events = [i for i in self.interactions if i.get("type") == "event"]

        return {
            "session_id": self.session_id,
            "peer": self.peer,
            "duration": time.time() - self.start_time,
            "total_interactions": len(self.interactions),
            "inputs": len(inputs),
            "screen_changes": len(screens),
            "events": len(events),
            "tokens_received": [i.get("token") for i in inputs],
            "screens_visited": [s.get("screen") for s in screens],
        }


class SessionLoader:
    """
    Loads and lists recorded transcripts.
    """

    @staticmethod
    def load_session(filepath: str) -> Dict[str, Any]:
        """
        Load a transcript from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)

    @staticmethod
    def list_sessions(sessions_dir: str = "sessions") -> List[Dict[str, Any]]:
        """
        List all transcripts in a directory, newest first.

        Args:
            sessions_dir: Directory containing transcripts

        Returns:
            List of transcript metadata
        """
        sessions_path = Path(sessions_dir)
        if not sessions_path.exists():
            return []

        sessions = []
        for session_file in sessions_path.glob("*.json"):
            try:
                session_data = SessionLoader.load_session(str(session_file))
            except (json.JSONDecodeError, UnicodeDecodeError):
                continue
            if not isinstance(session_data, dict):
                continue
            sessions.append({
                "filename": session_file.name,
                "filepath": str(session_file),
                "session_id": session_data.get("session_id"),
                "peer": session_data.get("peer"),
                "start_time": session_data.get("start_time"),
                "duration": session_data.get("duration"),
                "total_interactions": session_data.get("total_interactions"),
                "recorded_at": session_data.get("metadata", {}).get("recorded_at"),
            })

        sessions.sort(key=lambda x: x.get("start_time") or 0, reverse=True)
        return sessions

    @staticmethod
    def get_session_interactions(filepath: str) -> List[Dict[str, Any]]:
        session_data = SessionLoader.load_session(filepath)
        return session_data.get("interactions", [])
