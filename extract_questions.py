import sys
from pathlib import Path
from typing import List

from extraction import DocumentError
from question_parser import parse_document

SUPPORTED_SUFFIXES = {".pdf", ".docx"}


def _collect_documents(args: List[str]) -> List[Path]:
    roots = [Path(a) for a in args] or [Path("documents")]
    found = []
    for root in roots:
        if root.is_dir():
            found.extend(p for p in root.iterdir() if p.suffix.lower() in SUPPORTED_SUFFIXES)
        elif root.exists():
            found.append(root)
        else:
            print(f"Skipping missing path: {root}")
    found.sort(key=lambda x: x.name)
    return found


def main(argv: List[str] = None) -> int:
    docs = _collect_documents(sys.argv[1:] if argv is None else argv)
    if not docs:
        print("No documents found.")
        return 1

    print(f"Found {len(docs)} documents.")

    with open("all_questions.txt", "w", encoding="utf-8") as f_out:
        for path in docs:
            print(f"Processing {path.name}...")
            try:
                questions = parse_document(path.read_bytes(), path.name)
            except DocumentError as e:
                print(f"Error processing {path.name}: {e}")
                continue

            f_out.write(f"\n--- FILE: {path.name} ---\n")
            if not questions:
                f_out.write("NO QUESTIONS FOUND\n")
                continue

            for q in questions:
                f_out.write(f"{q.question_number}. {q.text}\n")
                for opt in q.options:
                    f_out.write(f"  {opt.letter}. {opt.text}\n")
                f_out.write(f"  * {q.correct_answer or '?'}\n\n")

    print("Done! All questions saved to all_questions.txt")
    return 0


if __name__ == "__main__":
    sys.exit(main())
