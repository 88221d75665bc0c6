import dxfcreator
from dxfcreator.cli import demo_document


result = dxfcreator.audit(demo_document())
print(result)
