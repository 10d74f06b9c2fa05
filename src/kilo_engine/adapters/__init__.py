"""Hosts that drive an editor session: raw terminal and Textual."""
