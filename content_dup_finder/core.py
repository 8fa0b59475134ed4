from collections import namedtuple

DuplicateGroup = namedtuple('DuplicateGroup', ['digest', 'members'])

def find_duplicates(index):
    """Yield every digest group in the index with more than one member.

    Must only be called once the hashing pipeline has finished; groups come
    out in store order.
    """
    for digest, members in index.groups():
        if len(members) > 1:
            yield DuplicateGroup(digest, frozenset(members))

def format_group(group):
    """Render a duplicate group as lines of text."""
    lines = [f"Digest: {group.digest} ({len(group.members)} files)"]
    for path in sorted(group.members):
        lines.append(f"  {path}")
    return lines
