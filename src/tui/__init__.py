"""Terminal UI for browsing recorded WOPR session transcripts."""
