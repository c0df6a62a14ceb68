# Font family codes understood by the host canvas
FONT_HANDWRITTEN = 1
FONT_SANS = 2
FONT_MONOSPACE = 3

DEFAULT_FONT_SIZE = 16
CHAR_WIDTH_FACTOR = 0.6
CONTENT_PADDING = 20
HEADER_HEIGHT = 30

SIZING = {
    "code": {
        "min_width": 400, "max_width": 800,
        "min_height": 200, "max_height": 2000,
        "chrome": 50, "line_height": 1.5, "header": True,
        "min_line_chars": 0,
        "strategy": "viewport-center",
    },
    "terminal": {
        "min_width": 500, "max_width": 900,
        "min_height": 150, "max_height": 2000,
        "chrome": 40, "line_height": 1.5, "header": True,
        "min_line_chars": 0,
        "strategy": "viewport-center",
    },
    "note": {
        "min_width": 200, "max_width": 400,
        "min_height": 100, "max_height": 1200,
        "chrome": 40, "line_height": 1.5,
        "min_line_chars": 20,
        "strategy": "viewport-center",
    },
    "diagram": {
        "min_width": 300, "max_width": 600,
        "min_height": 200, "max_height": 1200,
        "chrome": 60, "line_height": 1.5, "header": True,
        "min_line_chars": 0,
        "strategy": "viewport-center",
    },
    "chat": {
        "min_width": 200, "max_width": 600,
        "min_height": 60, "max_height": 1600,
        "chrome": 40, "line_height": 1.5,
        "min_line_chars": 15,
        "strategy": "flow",
    },
    "text": {
        "min_width": 20, "max_width": 500,
        "min_height": 30, "max_height": 30,
        "chrome": 0, "line_height": 1.5,
        "min_line_chars": 0,
        "strategy": "viewport-center",
    },
}

CODE_STYLE = {
    "container": {
        "strokeColor": "#1e293b",
        "backgroundColor": "#0f172a",
        "fillStyle": "solid",
        "strokeWidth": 2,
        "roughness": 0,
        "opacity": 95,
        "roundness": {"type": 3, "value": 8},
    },
    "title": {"strokeColor": "#94a3b8", "fontFamily": FONT_MONOSPACE},
    "divider": {"strokeColor": "#334155", "strokeWidth": 1, "roughness": 0, "opacity": 60},
    "text": {"strokeColor": "#e2e8f0", "fontFamily": FONT_MONOSPACE, "lineHeight": 1.5},
}

TERMINAL_STYLE = {
    "container": {
        "strokeColor": "#000000",
        "backgroundColor": "#1a1a1a",
        "fillStyle": "solid",
        "strokeWidth": 1,
        "roughness": 0,
        "opacity": 100,
        "roundness": {"type": 3, "value": 8},
    },
    "header": {
        "strokeColor": "#000000",
        "backgroundColor": "#2d2d2d",
        "fillStyle": "solid",
        "strokeWidth": 0,
        "roughness": 0,
        "opacity": 100,
    },
    "title": {"strokeColor": "#a0a0a0", "fontFamily": FONT_MONOSPACE},
    "text": {"strokeColor": "#00ff00", "fontFamily": FONT_MONOSPACE, "lineHeight": 1.4},
}

# color name -> (background, border, foreground)
NOTE_PALETTE = {
    "yellow": ("#fef3c7", "#f59e0b", "#78350f"),
    "pink": ("#fce7f3", "#ec4899", "#831843"),
    "blue": ("#dbeafe", "#3b82f6", "#1e3a8a"),
    "green": ("#d1fae5", "#10b981", "#064e3b"),
}
DEFAULT_NOTE_COLOR = "yellow"

DIAGRAM_STYLE = {
    "container": {
        "strokeColor": "#6366f1",
        "backgroundColor": "#eef2ff",
        "fillStyle": "solid",
        "strokeWidth": 2,
        "roughness": 1,
        "opacity": 100,
        "roundness": {"type": 3, "value": 8},
    },
    "title": {"strokeColor": "#3730a3", "fontFamily": FONT_SANS},
    "divider": {"strokeColor": "#a5b4fc", "strokeWidth": 1, "roughness": 0, "opacity": 80},
    "text": {"strokeColor": "#1e1b4b", "fontFamily": FONT_HANDWRITTEN, "lineHeight": 1.5},
}

# role -> bubble color, label text
CHAT_ROLES = {
    "user": {"color": "#3b82f6", "label": "You"},
    "assistant": {"color": "#64748b", "label": "AI"},
    "system": {"color": "#a855f7", "label": "System"},
}
CHAT_TEXT_COLOR = "#ffffff"
CHAT_LABEL_COLOR = "#94a3b8"
CHAT_LABEL_OFFSET = 20

DOCUMENT_ICONS = {
    "pdf": "📄",
    "image": "🖼️",
    "file": "📁",
}
DOCUMENT_SIZE = (300, 400)
