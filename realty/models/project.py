from realty.extensions import db


class Project(db.Model):
    """A listed development. Loaded out of band, read-only to the public API."""

    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    slug = db.Column(db.Text, nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Text, nullable=False)
    location = db.Column(db.Text, nullable=False)
    completion = db.Column(db.Text, nullable=False)
    features = db.Column(db.JSON, nullable=False, default=list)
    image_url = db.Column(db.Text, nullable=False)
    images = db.Column(db.JSON, nullable=False, default=list)
    pdf_url = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'price': self.price,
            'location': self.location,
            'completion': self.completion,
            'features': list(self.features or []),
            'imageUrl': self.image_url,
            'images': list(self.images or []),
            'pdfUrl': self.pdf_url,
        }
