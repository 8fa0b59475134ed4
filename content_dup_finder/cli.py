import click
from .config import config, logger
from .core import find_duplicates, format_group
from .database import open_index, backup_database
from .errors import ScanError
from .pipeline import scan_directory

ALGORITHMS = ['md5', 'sha1', 'sha256', 'sha512', 'blake2b', 'sha3_256']

def print_report(index):
    groups = 0
    for group in find_duplicates(index):
        groups += 1
        print()
        for line in format_group(group):
            print(line)
    if groups:
        print(f"\nTotal: {groups} duplicate groups")
    else:
        logger.info("No duplicate files found.")
    return groups

@click.group()
def cli():
    """Content Duplicate Finder - Group files with identical contents by digest."""
    pass

@cli.command()
@click.option('--dir', 'root', required=True, type=click.Path(file_okay=False),
              help='Directory to scan')
@click.option('--db', default=config['default_db'], help='Digest index file')
@click.option('--algorithm', type=click.Choice(ALGORITHMS), default=config['hash_algorithm'],
              help='Hash algorithm used for file digests')
@click.option('--skip-unreadable/--fail-on-unreadable', default=config['skip_unreadable'],
              help='Log and skip files that cannot be read instead of aborting')
@click.option('--progress/--no-progress', default=config['progress'], help='Show a progress bar')
def scan(root, db, algorithm, skip_unreadable, progress):
    """Scan a directory and report files with identical contents."""
    backup_database(db)
    try:
        with open_index(db, algorithm) as index:
            scan_directory(root, index, algorithm=algorithm, queue_size=config['queue_size'],
                           skip_unreadable=skip_unreadable, progress=progress)
            print_report(index)
    except ScanError as e:
        raise click.ClickException(str(e))

@cli.command()
@click.option('--db', default=config['default_db'], help='Digest index file')
@click.option('--algorithm', type=click.Choice(ALGORITHMS), default=config['hash_algorithm'],
              help='Hash algorithm the index was built with')
def check(db, algorithm):
    """Report duplicates already recorded in the digest index."""
    try:
        with open_index(db, algorithm) as index:
            logger.info(f"{index.count()} distinct digests in {db}")
            print_report(index)
    except ScanError as e:
        raise click.ClickException(str(e))

@cli.command()
@click.option('--db', default=config['default_db'], help='Digest index file')
@click.option('--algorithm', type=click.Choice(ALGORITHMS), default=config['hash_algorithm'],
              help='Hash algorithm the index was built with')
@click.argument('digest')
def show(db, algorithm, digest):
    """Show every path recorded for a digest."""
    try:
        with open_index(db, algorithm) as index:
            members = index.lookup(digest.upper())
    except ScanError as e:
        raise click.ClickException(str(e))
    if members is None:
        raise click.ClickException(f"Digest {digest} not found in {db}")
    for path in sorted(members):
        print(path)

@cli.command()
@click.option('--db', default=config['default_db'], help='Digest index file')
@click.option('--algorithm', type=click.Choice(ALGORITHMS), default=config['hash_algorithm'],
              help='Hash algorithm the index was built with')
@click.confirmation_option(prompt='Remove every recorded digest?')
def clear(db, algorithm):
    """Reset the digest index."""
    backup_database(db)
    try:
        with open_index(db, algorithm) as index:
            index.clear()
    except ScanError as e:
        raise click.ClickException(str(e))
    logger.info(f"Digest index {db} cleared")
