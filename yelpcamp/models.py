from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.ext.orderinglist import ordering_list

db = SQLAlchemy()


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    def __repr__(self):
        return f'<User {self.username}>'


class Campground(db.Model):
    __tablename__ = 'campgrounds'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    image = db.Column(db.String(500))
    description = db.Column(db.Text)
    # Ordered by insertion; ordering_list keeps `position` in step with appends
    comments = db.relationship(
        'Comment',
        back_populates='campground',
        order_by='Comment.position',
        collection_class=ordering_list('position'),
    )

    def __repr__(self):
        return f'<Campground {self.id} {self.name}>'


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    # Nullable: a comment is created before it is appended to its campground
    campground_id = db.Column(db.Integer, db.ForeignKey('campgrounds.id'))
    position = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    author = db.relationship('User')
    campground = db.relationship('Campground', back_populates='comments')

    def __repr__(self):
        return f'<Comment {self.id} by {self.author_id}>'
