# seed.py

import logging
from dataclasses import dataclass

from elasticsearch import NotFoundError

log = logging.getLogger(__name__)

INDEX = 'people'


@dataclass(frozen=True)
class Person:
    id: str
    title: str
    first_name: str
    last_name: str
    email: str
    country: str

    def to_document(self) -> dict:
        # field names match the ones query.py searches and highlights
        return {
            'id': self.id,
            'title': self.title,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'country': self.country,
        }


PEOPLE = (
    Person('1', 'Mr.', 'Marco', 'Franssen', 'marco.franssen@elasticsearch.com', 'The Netherlands'),
    Person('2', 'Mr.', 'John', 'Doe', 'john.doe@elasticsearch.com', 'Neverland'),
    Person('3', 'Mrs.', 'Jane', 'Doe', 'jane.doe@golang.org', 'Neverland'),
    Person('4', 'Mr.', 'Rob', 'Pike', 'rob.pike@golang.org', 'Unknown'),
)


# -------------------
# Index bootstrap
# -------------------
def bootstrap(es, index: str = INDEX, people=PEOPLE, strict: bool = False):
    """
    Reset `index` so it holds exactly `people`, keyed by id.

    Steps run in order and any failure propagates; records created before
    the failing one are left in place. A missing index on delete is only
    an error when `strict` is set.
    """
    try:
        es.indices.delete(index=index)
        log.info('Deleted index %s', index)
    except NotFoundError:
        if strict:
            raise
        log.info('Index %s did not exist, nothing to delete', index)

    es.indices.create(index=index)
    log.info('Created index %s', index)

    for p in people:
        es.create(index=index, id=p.id, document=p.to_document())
        log.debug('Indexed %s %s (id=%s)', p.first_name, p.last_name, p.id)

    es.indices.refresh(index=index)
    log.info('Loaded %d records into %s', len(people), index)
