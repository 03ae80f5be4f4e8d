"""A stand-in output sink that records every call it receives."""


class RecordingSink:
    def __init__(self):
        self.calls = []

    def set_foreground(self, color):
        self.calls.append(('set_foreground', tuple(color)))

    def set_background(self, color):
        self.calls.append(('set_background', tuple(color)))

    def print(self, text):
        self.calls.append(('print', text))

    def move_to(self, x, y):
        self.calls.append(('move_to', x, y))

    def hide_cursor(self):
        self.calls.append(('hide_cursor',))

    def show_cursor(self):
        self.calls.append(('show_cursor',))

    def reset_colors(self):
        self.calls.append(('reset_colors',))

    def flush(self):
        self.calls.append(('flush',))

    def printed(self):
        return ''.join(c[1] for c in self.calls if c[0] == 'print')
