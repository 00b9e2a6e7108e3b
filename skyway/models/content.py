from datetime import datetime, timezone
from skyway.extensions import db

class PageContent(db.Model):
    """Editable static page (about, terms, faq...) addressed by slug"""
    __tablename__ = 'page_contents'
    
    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    
    updated_by = db.Column(db.Integer, db.ForeignKey('users.id'))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    
    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'content': self.content,
            'updatedBy': self.updated_by,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }


class SiteSetting(db.Model):
    __tablename__ = 'site_settings'
    
    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    
    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
