"""Candidate queries for the manager console, in priority order.

The console is localized (pt-BR) and its markup changes between releases,
so every interaction point is a fallback chain rather than one selector.
"""

import re

from manager_e2e.browser.element_resolver import by_css, by_label, by_placeholder, by_role, by_text
from manager_e2e.models.communications import EDITORIA_NAME
from manager_e2e.utils.sanitization import literal_pattern

NEXT_LABEL = re.compile(r"pr[oó]ximo", re.I)
PUBLISH_LABEL = re.compile(r"publicar", re.I)
FILE_BUTTON_LABEL = re.compile(r"selecionar arquivo|choose file", re.I)

TITLE_TEXT = re.compile(r"t[ií]tulo", re.I)
BODY_TEXT = re.compile(r"texto|mensagem|conte[uú]do|corpo|body", re.I)
BODY_LABEL_TEXT = re.compile(r"mensagem|conte[uú]do|corpo|body", re.I)
OPTION_TEXT = re.compile(r"op[cç][aã]o|alternativa", re.I)
SEGMENTATION_TEXT = re.compile(r"segmenta[cç][aã]o", re.I)
DISPLAY_DURATION_TEXT = re.compile(r"prazo de exibi[cç][aã]o", re.I)
EDITORIA_PATTERN = literal_pattern(EDITORIA_NAME)

TITLE_FIELD = (
    by_role("textbox", name=TITLE_TEXT),
    by_label(TITLE_TEXT),
    by_placeholder(TITLE_TEXT),
    by_css('input[name*="title" i]'),
)

BODY_FIELD = (
    by_role("textbox", name=BODY_TEXT),
    by_label(BODY_LABEL_TEXT),
    by_placeholder(BODY_TEXT),
    by_css("textarea"),
)

QUESTION_FIELD = (by_label(re.compile(r"pergunta|question", re.I)),)

# Any visible one of these means the wizard reached its content editor
CONTENT_MARKERS = (
    *TITLE_FIELD,
    *BODY_FIELD,
    *QUESTION_FIELD,
    by_role("button", name=FILE_BUTTON_LABEL),
    by_role("tab", name=re.compile(r"capa", re.I)),
    by_role("heading", name=re.compile(r"capa", re.I)),
    by_text(re.compile(r"comece a criar sua pesquisa", re.I)),
)

CHANNELS_MARKERS = (
    by_role("heading", name=re.compile(r"canais", re.I)),
    by_text(re.compile(r"em quais canais", re.I)),
)

CATEGORY_MARKERS = (
    by_role("heading", name=re.compile(r"editorias", re.I)),
    by_text(re.compile(r"selecione em qual editoria", re.I)),
    by_text(EDITORIA_NAME),
)

SEGMENTATION_MARKERS = (by_role("heading", name=SEGMENTATION_TEXT),)

APP_CHANNEL = (
    by_role("checkbox", name=re.compile(r"aplicativo", re.I)),
    by_label(re.compile(r"aplicativo", re.I)),
    by_text(re.compile(r"aplicativo", re.I)),
)

TV_CHANNEL = (
    by_role("checkbox", name=re.compile(r"\btv\b", re.I)),
    by_label(re.compile(r"\btv\b", re.I)),
    by_text(re.compile(r"\btv\b", re.I)),
)

EDITORIA_COMBO = (
    by_role("combobox", name=re.compile(r"editoria", re.I)),
    by_label(re.compile(r"editoria", re.I)),
    by_text(re.compile(r"editoria", re.I)),
)

EDITORIA_OPTION = (
    by_role("option", name=EDITORIA_PATTERN),
    by_text(EDITORIA_NAME),
)

EVERYONE_SEGMENT_TEXT = re.compile(r"todos|toda empresa|todos os colaboradores", re.I)

EVERYONE_SEGMENT = (
    by_role("checkbox", name=EVERYONE_SEGMENT_TEXT),
    by_role("treeitem", name=EVERYONE_SEGMENT_TEXT),
    by_text(re.compile(r"^todos$", re.I)),
    by_text(re.compile(r"todos os colaboradores|toda empresa|toda a empresa", re.I)),
)

ALTERNATIVES_TOGGLE = (
    by_role("button", name=re.compile(r"alternativas", re.I)),
    by_text(re.compile(r"alternativas", re.I)),
)

OPTION_FIELD = (
    by_label(OPTION_TEXT),
    by_placeholder(OPTION_TEXT),
    by_css('input[name*="option" i]'),
)

ADD_OPTION_BUTTON = (
    by_role("button", name=re.compile(r"adicionar|nova op[cç][aã]o", re.I)),
    by_css('button:has-text("Adicionar")'),
)
