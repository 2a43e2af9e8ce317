"""Chart rendering, dashboard and HTML export."""
