"""Interactive terminal frontends built with Textual."""
