"""Locust load testing script for StoryForge."""

import random

from locust import HttpUser, between, task

SAMPLE_SCRIPTS = [
    "Once upon a time",
    "The harbor was quiet that night.",
    "She opened the letter & read it twice.",
    "Nobody remembered who built the tower.",
]


class StoryForgeUser(HttpUser):
    """Simulated author editing a story and uploading narration."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        """Create a story to work on."""
        response = self.client.post("/stories", json={"title": "Load test story"})
        self.story = response.json()

    @task(3)
    def append_segment(self) -> None:
        """Append a segment and write the whole list back."""
        segments = self.story.get("segments", [])[-10:]
        segments.append({"script": {"text": random.choice(SAMPLE_SCRIPTS)}})
        response = self.client.put(
            f"/stories/{self.story['id']}",
            json={"title": self.story["title"], "segments": segments},
            name="/stories/[id]",
        )
        if response.status_code == 200:
            self.story = response.json()

    @task(2)
    def request_audio_upload(self) -> None:
        """Request an upload URL for a random existing segment."""
        segments = self.story.get("segments", [])
        if not segments:
            return
        segment = random.choice(segments)
        self.client.post(
            f"/stories/{self.story['id']}/segments/{segment['id']}/audio",
            name="/stories/[id]/segments/[id]/audio",
        )

    @task(1)
    def list_stories(self) -> None:
        """Fetch the first page of stories."""
        self.client.get("/stories?limit=30")

    @task(1)
    def create_and_delete(self) -> None:
        """Create a throwaway story and delete it."""
        response = self.client.post("/stories", json={"title": "Ephemeral"})
        if response.status_code == 201:
            story_id = response.json()["id"]
            self.client.delete(f"/stories/{story_id}", name="/stories/[id]")
