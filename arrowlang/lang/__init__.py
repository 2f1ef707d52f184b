"""Host layer of arrowlang: sessions over files, strings and the interactive shell, and error reporting."""
