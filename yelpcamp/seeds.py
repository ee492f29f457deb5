import click
from flask.cli import with_appcontext
from flask import current_app
from werkzeug.security import generate_password_hash

from .models import Campground, Comment, User, db

SEED_USERNAME = 'camper'

SAMPLE_CAMPGROUNDS = [
    {
        'name': "Cloud's Rest",
        'image': 'https://images.unsplash.com/photo-1504280390367-361c6d9f38f4',
        'description': 'High above the valley floor with nothing between you and the stars.',
    },
    {
        'name': 'Desert Mesa',
        'image': 'https://images.unsplash.com/photo-1487730116645-74489c95b41b',
        'description': 'Red rock, dry air and the quietest nights you will ever get.',
    },
    {
        'name': 'Canyon Floor',
        'image': 'https://images.unsplash.com/photo-1496545672447-f699b503d270',
        'description': 'A shaded creekside spot at the bottom of the canyon.',
    },
]

SAMPLE_COMMENT = 'This place is great, but I wish there was internet'


def seed_db():
    """Remove every campground and comment, then insert the sample data."""
    Comment.query.delete()
    Campground.query.delete()

    author = User.query.filter_by(username=SEED_USERNAME).first()
    if author is None:
        author = User(username=SEED_USERNAME,
                      password_hash=generate_password_hash(SEED_USERNAME,
                                                           method=current_app.config['PASSWORD_HASH_METHOD']))
        db.session.add(author)

    for fields in SAMPLE_CAMPGROUNDS:
        campground = Campground(**fields)
        campground.comments.append(Comment(text=SAMPLE_COMMENT, author=author))
        db.session.add(campground)
    db.session.commit()
    current_app.logger.info(f'seeded {len(SAMPLE_CAMPGROUNDS)} campgrounds')


@click.command('seed-db')
@with_appcontext
def seed_db_command():
    """Replace all campgrounds and comments with sample data."""
    seed_db()
    click.echo(f'Seeded {len(SAMPLE_CAMPGROUNDS)} campgrounds.')


def init_app(app):
    app.cli.add_command(seed_db_command)
