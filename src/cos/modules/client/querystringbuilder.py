import operator

from urllib.parse import urlencode


class QuerystringBuilder(object):
    """
    The querystring builder is responsible for creating the percent-encoded querystring of the final
    request URL. It is applied only at transport time, after any signature has been computed.
    """

    def build_querystring(self, request_map, base_map=None):
        """
        Creates a query string from maps. Merges the request map with a base map and sorts the keys
        in ascending order, so the same parameters always produce the same URL.
        """
        merged_map = dict(base_map or {})
        merged_map.update(request_map or {})
        sorted_query_data = sorted(((str(key), self._to_string(value)) for key, value in merged_map.items()),
                                   key=operator.itemgetter(0))
        # by default urlencode replace spaces with '+' but the services require them to be encoded to '%20'
        return urlencode(sorted_query_data).replace('+', '%20')

    def build_url(self, base_url, path="", request_map=None):
        url = base_url + path
        querystring = self.build_querystring(request_map)
        if querystring:
            url += "?" + querystring
        return url

    @staticmethod
    def _to_string(value):
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
