"""Sample catalog documents shared by the tests."""
from pathlib import Path


FUNCTION_READ_FILE = """<?xml version="1.0" encoding="UTF-8"?>
<function id="F01">
  <name>readFile</name>
  <category>
    <text xml:lang="de">Dateizugriff</text>
    <text xml:lang="en">File access</text>
  </category>
  <description>
    <text xml:lang="de">Liest eine Datei</text>
    <text xml:lang="en">Reads a file</text>
  </description>
  <parameters>
    <parameter>
      <name>path</name>
      <type>String</type>
      <direction>in</direction>
      <required>true</required>
      <defaultValue>/tmp</defaultValue>
    </parameter>
    <parameter>
      <name>buffer</name>
      <type>byte[]</type>
      <direction>OUT</direction>
    </parameter>
  </parameters>
  <returnValue>
    <type>int</type>
    <description>Number of bytes read</description>
  </returnValue>
  <exceptions>
    <exception>FileNotFoundException</exception>
  </exceptions>
  <detailedSteps>
    <step>
      <number>3</number>
      <description><text xml:lang="de">Drei</text><text xml:lang="en">Three</text></description>
    </step>
    <step>
      <number>1</number>
      <description><text xml:lang="de">Eins</text><text xml:lang="en">One</text></description>
      <errorCase>
        <exception>FileNotFoundException</exception>
        <trigger>File is missing</trigger>
      </errorCase>
    </step>
    <step>
      <number>2</number>
      <originalText>Close the file</originalText>
      <germanText>Datei schliessen</germanText>
    </step>
  </detailedSteps>
  <precondition>File exists</precondition>
  <systemLog>
    <logType>system</logType>
    <structure>
      <field><name>fileName</name><type>String</type><required>true</required></field>
    </structure>
  </systemLog>
</function>
"""

FUNCTION_WRITE_FILE = """<function>
  <name>writeFile</name>
  <category>Dateizugriff</category>
  <description>Writes a file</description>
</function>
"""

FUNCTION_BARE = """<function>
  <description>No identity at all</description>
</function>
"""

FUNCTION_TAGGED_TEXT = """<function>
  <name>openFile</name>
  <precondition>
    <text xml:lang="de">Datei existiert</text>
    <text xml:lang="en">File exists</text>
  </precondition>
  <postcondition><text xml:lang="en">File is open</text></postcondition>
  <note type="info">
    <text xml:lang="de">Nur lesend</text>
    <text xml:lang="en">Read only</text>
  </note>
  <note type="warning">Plain note</note>
</function>
"""

ENUM_COLOR = """<enum>
  <name>Color</name>
  <category>Basics</category>
  <description>Colors</description>
  <values>
    <value><name>RED</name><numericValue>1</numericValue></value>
    <value><name>GREEN</name><numericValue>2</numericValue><deprecated>true</deprecated></value>
  </values>
  <constraints>
    <constraint type="range">Only 1 or 2</constraint>
  </constraints>
</enum>
"""

ENUM_ALPHA = """<enum>
  <name>Alpha</name>
  <values><value><name>A</name></value></values>
</enum>
"""

TYPE_READ_RESULT = """<resultType>
  <name>ReadResult</name>
  <description>Result of readFile</description>
  <fields>
    <field><name>code</name><type>int</type><required>true</required></field>
    <field><name>data</name><type>byte[]</type></field>
  </fields>
</resultType>
"""

TYPE_LEGACY = """<dataStructure>
  <n>Handle</n>
  <baseType>int</baseType>
</dataStructure>
"""

EXCEPTION_NOT_FOUND = """<exception>
  <name>FileNotFoundException</name>
  <category>IO</category>
  <severity>High</severity>
  <description>Raised when a file is missing</description>
  <thrownBy>
    <function>readFile</function>
  </thrownBy>
  <relatedExceptions>
    <exception>IOException - Base class for I/O errors</exception>
  </relatedExceptions>
  <recovery>Check the path</recovery>
</exception>
"""

EXCEPTION_TWO_RECOVERIES = """<exception>
  <name>E</name>
  <recovery><action>a</action></recovery>
  <recovery><action>b</action></recovery>
</exception>
"""

EXCEPTION_TIMEOUT = """<exception>
  <name>TimeoutException</name>
  <category>IO</category>
  <description>Raised on timeouts</description>
</exception>
"""

PROCESS_APPLY = """<process>
  <processId>P-01</processId>
  <processName>
    <text xml:lang="de">Antrag stellen</text>
    <text xml:lang="en">Submit application</text>
  </processName>
  <description>Citizen submits an application</description>
  <actors><actor>Citizen</actor></actors>
  <interfaceFunctions>
    <function>readFile</function>
    <function>writeFile</function>
  </interfaceFunctions>
  <possibleExceptions>
    <exception>FileNotFoundException</exception>
  </possibleExceptions>
</process>
"""

PROCESS_REVIEW = """<process>
  <processName>Review</processName>
</process>
"""

CHAIN_PK01 = """<processChain>
  <chainId>PK-01</chainId>
  <name><text xml:lang="de">Antragskette</text><text xml:lang="en">Application chain</text></name>
  <description>End to end application</description>
  <involvedProcesses>
    <process id="P01"><name>Antrag stellen</name></process>
    <process id="P02"><name>Review</name></process>
  </involvedProcesses>
  <steps>
    <step>
      <stepNumber>2</stepNumber>
      <name>Review</name>
      <function><name>readFile</name></function>
    </step>
    <step>
      <stepNumber>1</stepNumber>
      <name>Apply</name>
      <function>
        <name>writeFile</name>
        <linkedProcess id="P01"><name>Antrag stellen</name></linkedProcess>
      </function>
      <critical>true</critical>
      <frequency>daily</frequency>
    </step>
  </steps>
  <outcome>
    <state>Application stored</state>
    <logMessages><logMessage>LM-1</logMessage></logMessages>
    <artifacts><artifact>Receipt</artifact></artifacts>
  </outcome>
  <importantNotes><note>First</note></importantNotes>
  <importantNotes><note>Second</note><note>Third</note></importantNotes>
</processChain>
"""

CHAIN_WITHOUT_ID = """<processChain>
  <name>Unnamed chain</name>
</processChain>
"""

PROCESS_MAP = """<processMap>
  <metadata>
    <title><text xml:lang="de">Prozesslandkarte</text><text xml:lang="en">Process map</text></title>
    <version>1.0</version>
    <standards><standard>TR-03153</standard><standard>TR-03151</standard></standards>
  </metadata>
  <mainCategories>
    <category id="C1">
      <name>Applications</name>
      <icon>file</icon>
      <subCategories>
        <subCategory id="C1.1">
          <name>Submission</name>
          <processes>
            <process id="P01" mandatory="true"><name>Antrag stellen</name></process>
          </processes>
          <processChains>
            <processChain id="PK-01"><name>Application chain</name></processChain>
          </processChains>
        </subCategory>
      </subCategories>
    </category>
  </mainCategories>
  <criticalProcesses>
    <process id="P01"><name>Antrag stellen</name><reason>Legal deadline</reason></process>
  </criticalProcesses>
  <navigation>
    <recommendedStartingPoints>
      <startingPoint><role>Citizen</role><start>P01</start></startingPoint>
    </recommendedStartingPoints>
    <learningPaths>
      <learningPath>
        <name>Basics</name>
        <steps><step id="P01"><description>Start here</description></step></steps>
      </learningPath>
    </learningPaths>
  </navigation>
</processMap>
"""

MERMAID_APPLY_DE = "graph TD\n  A[Antrag] --> B[Pruefung]\n"


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def build_catalog(base: Path) -> Path:
    """Write a small but complete catalog below ``base``."""
    write(base / "functions" / "readFile.xml", FUNCTION_READ_FILE)
    write(base / "functions" / "writeFile.xml", FUNCTION_WRITE_FILE)
    write(base / "functions" / "broken.xml", "<function><name>oops</function>")
    write(base / "functions" / "notes.txt", "not xml")
    write(base / "enums" / "Color.xml", ENUM_COLOR)
    write(base / "enums" / "Alpha.xml", ENUM_ALPHA)
    write(base / "types" / "ReadResult.xml", TYPE_READ_RESULT)
    write(base / "types" / "Handle.xml", TYPE_LEGACY)
    write(base / "exceptions" / "FileNotFoundException.xml", EXCEPTION_NOT_FOUND)
    write(base / "exceptions" / "TimeoutException.xml", EXCEPTION_TIMEOUT)
    write(base / "exceptions" / "stray.xml", FUNCTION_WRITE_FILE)

    processes = base / "processes"
    write(processes / "CitizenPortal" / "flow" / "P01.xml", PROCESS_APPLY)
    write(processes / "CitizenPortal" / "flow" / "P01_de.mermaid", MERMAID_APPLY_DE)
    write(processes / "CitizenPortal" / "sequenz" / "P02.xml", PROCESS_REVIEW)
    write(processes / "Authority" / "flow" / "P03.xml", PROCESS_REVIEW)
    write(processes / "PK01" / "Chain1.xml", CHAIN_PK01)
    write(processes / "PK01" / "Y.xml", CHAIN_WITHOUT_ID)
    write(processes / "PK01" / "stray.xml", PROCESS_REVIEW)
    write(processes / "map.xml", PROCESS_MAP)
    return base
