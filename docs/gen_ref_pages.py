"""Build the API reference pages for mkdocs.

Run by mkdocs-gen-files during ``mkdocs build``: every public module under
``src/powstr/`` gets a ``::: powstr.module`` page, and ``SUMMARY.md`` lists
them for mkdocs-literate-nav. Private modules (leading underscore) and the
CLI entry point are left out.
"""

from pathlib import Path

import mkdocs_gen_files


SRC = Path("src")
PACKAGE = SRC / "powstr"
REF_DIR = Path("reference")

nav = mkdocs_gen_files.Nav()

for path in sorted(PACKAGE.rglob("*.py")):
    parts = path.relative_to(SRC).with_suffix("").parts
    if parts[-1] == "__main__" or (parts[-1].startswith("_") and parts[-1] != "__init__"):
        continue

    is_package = parts[-1] == "__init__"
    if is_package:
        parts = parts[:-1]
        doc_path = Path(*parts[1:], "index.md")
    else:
        doc_path = Path(*parts[1:]).with_suffix(".md")

    nav[parts[1:] or ("powstr",)] = doc_path.as_posix()

    with mkdocs_gen_files.open(REF_DIR / doc_path, "w") as fd:
        fd.write(f"::: {'.'.join(parts)}\n")
        if is_package:
            # Members get their own pages
            fd.write("    options:\n      members: false\n")

    mkdocs_gen_files.set_edit_path(REF_DIR / doc_path, path.relative_to(SRC))

with mkdocs_gen_files.open(REF_DIR / "SUMMARY.md", "w") as nav_file:
    nav_file.writelines(nav.build_literate_nav())
