"""
Renderers for downloadable reports.

The view builds the file body itself; these renderers only let
``?format=csv`` / ``?format=xlsx`` pick the file type. Error payloads
(permission or validation failures) are still sent as JSON.
"""

from rest_framework.renderers import JSONRenderer


class FileExportRenderer(JSONRenderer):

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if isinstance(data, bytes):
            return data
        if isinstance(data, str):
            return data.encode(self.charset or 'utf-8')

        response = (renderer_context or {}).get('response')
        if response is not None:
            response['Content-Type'] = 'application/json'
        return super().render(data, 'application/json', renderer_context)


class CSVExportRenderer(FileExportRenderer):
    media_type = 'text/csv'
    format = 'csv'
    charset = 'utf-8'


class XLSXExportRenderer(FileExportRenderer):
    media_type = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    format = 'xlsx'
    charset = None
