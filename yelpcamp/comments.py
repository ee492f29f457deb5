"""
Comment routes, nested under a campground.

Creating a comment takes two round trips: the comment row is inserted first
and only then appended to the campground and saved. There is no transaction
across the two, so a failed save leaves an orphaned comment behind.
"""
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from . import store
from .auth import current_identity, login_required
from .campgrounds import load_campground
from .errors import NotFound, PersistenceError
from .models import Comment

comments_bp = Blueprint('comments', __name__, url_prefix='/campgrounds/<campground_id>/comments')


@comments_bp.route('/new')
@login_required
def new(campground_id):
    campground = load_campground(campground_id)
    return render_template('comments/new.html', campground=campground)


@comments_bp.route('', methods=['POST'])
@login_required
def create(campground_id):
    try:
        campground = load_campground(campground_id)
    except (NotFound, PersistenceError) as e:
        current_app.logger.warning(f'comment on campground {campground_id} rejected: {e}')
        return redirect(url_for('campgrounds.index'))

    author = current_identity().user
    try:
        comment = store.create(Comment, {'text': request.form.get('text'), 'author_id': author.id})
        campground.comments.append(comment)
        store.save(campground)
    except PersistenceError:
        flash('Your comment could not be saved.', 'error')
        return redirect(url_for('campgrounds.show', campground_id=campground_id))
    return redirect(url_for('campgrounds.show', campground_id=campground.id))
