"""CSS styles for the ARC69 terminal UI."""

CSS = """
Screen {
    background: $surface;
}

#connection-status {
    dock: top;
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-align: right;
}

#lookup-form {
    height: auto;
    padding: 1 2;
}

#lookup-form Horizontal,
ModalScreen Horizontal {
    height: auto;
    margin-top: 1;
}

#lookup-form Button,
ModalScreen Button {
    margin-right: 2;
}

ModalScreen {
    align: center middle;
    background: $background 70%;
}

ModalScreen > * {
    width: 96;
    max-width: 100%;
}

#attributes-table, #history-table {
    height: auto;
    max-height: 12;
    border: round $primary;
}

#property-path-input, #mnemonic-input {
    margin-bottom: 1;
}

#property-result {
    min-height: 1;
    padding: 0 1;
    color: $success;
}

#metadata-json-input {
    height: 16;
    border: round $secondary;
}

#loading-message {
    padding: 1 4;
    border: heavy $warning;
    color: $warning;
    text-style: bold;
}

#result-title {
    color: $success;
    text-style: bold;
}

#tx-id-display {
    padding: 0 1;
    color: $accent;
}
"""
