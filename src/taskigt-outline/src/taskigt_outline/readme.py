"""Built-in help document.

Shown as the initial document of a new editing session. It is kept in
canonical form, so parsing and rendering it gives back the same text.
"""

README_TITLE = "My items"

README = """\
  - Hierarchical item based note taking
  - Different item types
    - Informational
    * Task (Doing)
    ? Task (Planned)
    # Task (Done)
    | Verbatim/quote

  - Controls
    | fold <id>
      - toggle item visibility (including sub items)
    | add <id>
      - Create new sub item (last of children, informational)
    | *clear content of item*
      - Deletes the item, if there are no sub-items

  - Persistence
    - save: stores the document under its title in the document directory
      | see storage.directory in config.yaml
    - restore: loads the document with the given title, replacing the current one

  - Export/import from text
    - A textual representation of the current document is given by 'taskigt show'
    - Import to the current document (overwriting it!) by loading a pasted or exported text
"""
