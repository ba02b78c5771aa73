"""The three maps a scan produces, and their export form."""

from sitescan.doop.records import spanToList


class ScanResult(object):
    """
    Output of one scan.

    Attributes:
        methodDeclarations: method signature -> MethodRecord.
        heapAllocations: allocation id -> AllocationRecord.
        fieldAccesses: field signature -> set of SourceSpan.
        sourcefiles: Units that contributed to the maps, in scan order.
        failures: (sourcefile, message) for units skipped with keepGoing.
    """

    def __init__(self, methodDeclarations=None, heapAllocations=None, fieldAccesses=None):
        self.methodDeclarations = methodDeclarations if methodDeclarations is not None else {}
        self.heapAllocations = heapAllocations if heapAllocations is not None else {}
        self.fieldAccesses = fieldAccesses if fieldAccesses is not None else {}
        self.sourcefiles = []
        self.failures = []

    @classmethod
    def fromScanner(cls, scanner):
        return cls(scanner.methodDeclarations, scanner.heapAllocations, scanner.fieldAccesses)

    def merge(self, other):
        """Add another result's entries; later entries win on equal keys."""
        self.methodDeclarations.update(other.methodDeclarations)
        self.heapAllocations.update(other.heapAllocations)
        for signature, spans in other.fieldAccesses.items():
            self.fieldAccesses.setdefault(signature, set()).update(spans)
        self.sourcefiles.extend(other.sourcefiles)
        self.failures.extend(other.failures)

    def toDict(self):
        """JSON-ready form, sorted so equal results serialize identically."""
        return {
            "methodDeclarations": {
                key: spanToList(record.span)
                for key, record in sorted(self.methodDeclarations.items())
            },
            "heapAllocations": {
                key: spanToList(record.span)
                for key, record in sorted(self.heapAllocations.items())
            },
            "fieldAccesses": {
                key: [spanToList(span) for span in sorted(spans)]
                for key, spans in sorted(self.fieldAccesses.items())
            },
        }

    def stats(self):
        return {
            "units": len(self.sourcefiles),
            "failures": len(self.failures),
            "methodDeclarations": len(self.methodDeclarations),
            "heapAllocations": len(self.heapAllocations),
            "fieldSignatures": len(self.fieldAccesses),
            "fieldAccesses": sum(len(spans) for spans in self.fieldAccesses.values()),
        }
