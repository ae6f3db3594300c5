# query.py

import json

SEARCH_FIELDS = ['lastName^100', 'firstName^10', 'country', 'title']
HIGHLIGHT_FIELDS = ['lastName', 'firstName', 'country', 'title']
PAGE_SIZE = 25
SORT = [{'_score': 'desc'}, {'_doc': 'asc'}]


def query_body(text: str) -> dict:
    """All terms must match; surname hits outrank first-name hits."""
    return {
        'query': {
            'multi_match': {
                'query': text,
                'fields': list(SEARCH_FIELDS),
                'operator': 'and'
            }
        },
        # number_of_fragments=0 highlights the whole field value
        'highlight': {
            'fields': {f: {'number_of_fragments': 0} for f in HIGHLIGHT_FIELDS}
        },
        'size': PAGE_SIZE,
        'sort': [dict(s) for s in SORT]
    }


def build_query(text: str) -> str:
    return json.dumps(query_body(text), indent=2, ensure_ascii=False)
