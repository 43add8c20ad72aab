import pytest

from skillroute.skills.models import RawDocument


OWNERSHIP_DOC = """---
name: m01-ownership
description: "Ownership, borrowing and lifetime errors"
triggers:
  - ownership
  - borrow
  - borrow checker
  - E0382
tier: core
related: [m07-concurrency]
---
# Ownership

## Core Question
Who owns this value, and for how long?

## Review Checklist
- [ ] No needless clones

## Verification Commands
```bash
cargo check
# Not a heading
```

## Related Skills
- `m07-concurrency` - when ownership crosses threads
- [Error handling](../m06-error-handling/SKILL.md)
"""

CONCURRENCY_DOC = """---
name: m07-concurrency
description: "Threads, Send/Sync, locks and data races"
triggers: [concurrency, thread, data race, deadlock, Arc<Mutex>]
tier: advanced
---
# Concurrency

## Core Question
Which thread owns the data?

## Review Checklist
- [ ] Locks are never held across await points

## Verification Commands
cargo test

## Related Skills
- `m01-ownership` - moving values into threads
"""

UNSAFE_DOC = """---
name: unsafe-checker
description: >
  Reviews unsafe blocks and FFI boundaries
  for soundness.
tier: expert
---
# Unsafe

## Core Question
What invariant does this unsafe block rely on?

## Triggers
- unsafe
- raw pointer
- FFI

## Related Skills
- **m01-ownership** for aliasing rules
"""


@pytest.fixture
def ownership_doc():
    return OWNERSHIP_DOC


@pytest.fixture
def sample_documents():
    return [
        RawDocument(identifier_hint="m01-ownership", raw_text=OWNERSHIP_DOC),
        RawDocument(identifier_hint="m07-concurrency", raw_text=CONCURRENCY_DOC),
        RawDocument(identifier_hint="unsafe-checker", raw_text=UNSAFE_DOC),
    ]


@pytest.fixture
def sample_result(sample_documents):
    from skillroute.skills.registry import load
    return load(sample_documents)


@pytest.fixture
def skills_dir(tmp_path):
    root = tmp_path / "skills"
    for name, text in (
        ("m01-ownership", OWNERSHIP_DOC),
        ("m07-concurrency", CONCURRENCY_DOC),
        ("unsafe-checker", UNSAFE_DOC),
    ):
        (root / name).mkdir(parents=True)
        (root / name / "SKILL.md").write_text(text, encoding="utf-8")
    return root
