"""
Options for API requests.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .model.codecs import Other, wire_value
from .model.enums import FilterKey, SortKey


@dataclass(frozen=True)
class GetCourseThreadsOptions:
    """
    Options for fetching the threads of a course, centered on skip-take pagination.

    limit:  how many threads to return. The service treats anything above 100
            as 100; nothing is checked client-side.
    offset: how many threads to skip before the first one returned.
    sort:   sort key; an Other(...) is sent verbatim.
    filter: optional feed filter; omitted from the query when None.
    """

    limit: int = 20
    offset: int = 0
    sort: Union[SortKey, Other] = SortKey.NEW
    filter: Optional[Union[FilterKey, Other]] = None

    def as_params(self) -> List[Tuple[str, str]]:
        """Query parameters in the order the service expects them"""
        params = [
            ("limit", str(self.limit)),
            ("offset", str(self.offset)),
            ("sort", wire_value(self.sort)),
        ]
        if self.filter is not None:
            params.append(("filter", wire_value(self.filter)))
        return params
