"""Sample notes, built through the structural editor."""

from collections.abc import Callable

from scr4tch.core.edit.clipboard import Clipboard
from scr4tch.core.edit.editor import DropEdge, StructuralEditor
from scr4tch.core.tree.navigation import iter_blocks
from scr4tch.models.block import BlockType
from scr4tch.models.content import HeadingLevel, ListType
from scr4tch.models.document import Category, Document, NoteStatus, Tag
from scr4tch.models.rich_text import RichRun
from scr4tch.protocols import StoreProtocol

CATEGORIES: dict[str, Category] = {
    "todo": Category(name="ToDo", hex_color="0000FF"),
    "important": Category(name="Important", hex_color="FF0000"),
}


def welcome_note(store: StoreProtocol | None = None) -> Document:
    """A short tour: styled text, a checklist, an accordion holding code."""
    doc = Document.new("Welcome to SCR4TCH")
    doc.category = CATEGORIES["todo"]
    doc.add_tag(Tag(name="getting-started"))
    editor = StructuralEditor(doc, store=store, clipboard=Clipboard())

    (intro,) = doc.blocks.blocks_sorted_by_order()
    intro.run = RichRun.plain("Notes are built from blocks.").with_style(0, 5, bold=True)

    checklist = editor.insert_list_after(intro, ListType.CHECKBOX).created[0]
    first_item = checklist.content.sorted_items()[0]
    first_item.text = RichRun.plain("Add a table")
    checklist.content.insert_item_after(first_item, text=RichRun.plain("Drag a block around"))

    accordion = editor.insert_accordion_after(checklist, HeadingLevel.H2).created[0]
    accordion.content.heading = RichRun.plain("Under the fold")
    (body,) = accordion.content.blocks.blocks_sorted_by_order()
    body.run = RichRun.plain("Accordions hide detail until opened.")
    code = editor.insert_code_after(body).created[0]
    code.content.code = 'print("hello")'
    editor.set_code_language(code, "python")
    return doc


def project_plan(store: StoreProtocol | None = None) -> Document:
    """Side-by-side columns, a table and a couple of links."""
    doc = Document.new("Project plan")
    doc.category = CATEGORIES["important"]
    doc.is_pinned = True
    editor = StructuralEditor(doc, store=store, clipboard=Clipboard())

    (heading,) = doc.blocks.blocks_sorted_by_order()
    heading.run = RichRun.plain("Goals for the quarter")

    columns = editor.insert_columns_after(heading, (2.0, 1.0)).created[0]
    left, right = (c.blocks.first() for c in columns.content.sorted_columns())
    left.run = RichRun.plain("Ship the editor")
    right.run = RichRun.plain("Write the docs")
    editor.insert_bookmark_after(right, "https://example.com/roadmap")

    table = editor.insert_table_after(columns, 2, 2).created[0]
    for (row, col), value in {(0, 0): "Task", (0, 1): "Owner", (1, 0): "Editor", (1, 1): "Sam"}.items():
        table.content.set_cell(row, col, value)

    quote = editor.insert_quote_after(table).created[0]
    quote.run = RichRun.plain("Small blocks, moved often.")
    editor.insert_file_path_after(quote, "/Users/sam/Documents/plan.pdf")
    return doc


def scratch_note(store: StoreProtocol | None = None) -> Document:
    """A temporary note: one line of text split around an image."""
    doc = Document.new("Scratch", status=NoteStatus.TEMP)
    editor = StructuralEditor(doc, store=store, clipboard=Clipboard())
    (line,) = doc.blocks.blocks_sorted_by_order()
    line.run = RichRun.plain("Before the picture. After the picture.")
    editor.insert_image_after(line, "https://example.com/cat.png", cursor=19, alt_text="A cat")
    return doc


SAMPLES: dict[str, Callable[..., Document]] = {
    "welcome": welcome_note,
    "plan": project_plan,
    "scratch": scratch_note,
}


def shuffle_session(doc: Document, *, store: StoreProtocol | None = None) -> int:
    """Run a burst of structural edits over every block of ``doc``.

    Returns how many of the edits changed the tree.
    """
    editor = StructuralEditor(doc, store=store, clipboard=Clipboard())
    changed = 0

    for block in list(iter_blocks(doc)):
        changed += editor.duplicate(block).changed

    top = doc.blocks.blocks_sorted_by_order()
    changed += editor.move(top[0], top[-1], DropEdge.BOTTOM).changed
    editor.copy(top[1])
    changed += editor.cut(top[2]).changed
    changed += editor.paste_after(top[1]).changed

    for i, block in enumerate(list(iter_blocks(doc))):
        if block.type is not BlockType.TEXT and i % 2 == 0:
            changed += editor.delete(block).changed
        elif block.type is BlockType.TEXT and len(block.run) > 4:
            changed += editor.extract_selection(block, 1, 3).changed
    return changed
